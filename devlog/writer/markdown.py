"""これは「更新ログ（Markdown）にエントリを差し込んで書き戻す」モジュールです。"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

from loguru import logger

from devlog.config.models import UpdatesFileConfig
from devlog.core.errors import LogWriteError
from devlog.core.time import format_entry_date, local_today
from devlog.core.types import ChangeRecord

ENTRY_TEMPLATE = "### {date}\n\n#### {title}\n{description}\n\n**Files:**\n{files}\n\n**Notes:**\n{notes}\n\n---\n\n"


def render_entry(record: ChangeRecord, date_str: str) -> str:
    """ChangeRecord を1ブロック分の Markdown にする（末尾は区切り線）。"""

    return ENTRY_TEMPLATE.format(
        date=date_str,
        title=record.title,
        description=record.description,
        files="\n".join(f"- {f}" for f in record.files),
        notes=record.notes,
    )


def insert_entry(content: str, entry: str, marker: str) -> tuple[str, bool]:
    """これは何をする関数？
    → marker が最初に現れる行の直後に entry を差し込み、(新しい内容, 末尾追記したか) を返します。
      - 新しいエントリほど marker のすぐ下に積まれる
      - marker が最終行で改行が無い場合は、改行を補ってから差し込む
      - marker が無ければ末尾にそのまま追記
    """

    pos = content.find(marker)
    if pos == -1:
        return content + entry, True

    eol = content.find("\n", pos)
    if eol == -1:
        return content + "\n" + entry, False
    return content[: eol + 1] + entry + content[eol + 1 :], False


class UpdatesLogWriter:
    """更新ログファイル1つ分の読み込み→差し込み→書き戻しを担当する。"""

    def __init__(
        self,
        cfg: UpdatesFileConfig | None = None,
        *,
        base_dir: str | Path | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._cfg = cfg or UpdatesFileConfig()
        self.path = self._cfg.resolve_path(base_dir)
        self._today = today or local_today

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("{} not found; starting a new log", self.path)
            return self._cfg.default_document()
        except (OSError, UnicodeError) as e:
            raise LogWriteError(str(e)) from e

    def _write(self, content: str) -> None:
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise LogWriteError(str(e)) from e

    def render(self, record: ChangeRecord) -> str:
        return render_entry(record, format_entry_date(self._today(), self._cfg.date_format))

    def apply(self, record: ChangeRecord) -> str:
        """ファイルを読み、エントリを差し込んで1回で書き戻す。失敗は LogWriteError。"""

        content = self._read()
        entry = self.render(record)
        new_content, appended = insert_entry(content, entry, self._cfg.marker)
        if appended:
            logger.warning("marker {!r} not found in {}; appending entry to the end", self._cfg.marker, self.path)
        self._write(new_content)
        return new_content

    def update(self, record: ChangeRecord, *, echo: Callable[[str], None] = print) -> bool:
        """これは何をする関数？
        → apply() を実行し、成功/失敗をオペレーターに表示して True/False を返します。
          失敗しても再試行はしません。
        """

        try:
            self.apply(record)
        except LogWriteError as e:
            logger.error("failed to update {}: {}", self.path, e)
            echo(f"❌ Error updating cursor updates file: {e}")
            return False
        logger.debug("entry written to {}", self.path)
        echo(f"✅ Successfully updated {self.path}")
        return True
