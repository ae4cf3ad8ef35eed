# これは「直近のコミット履歴を git から読み、変更ファイル一覧を取り出す」ファイルです。
from __future__ import annotations

import re
import subprocess
from pathlib import Path

from loguru import logger

from devlog.config.models import HistoryConfig
from devlog.core.errors import HistoryUnavailable

# --name-status の行（例: "M\tsrc/app.py"）。R100 などのリネーム行は対象外
STATUS_LINE_RE = re.compile(r"^[AMD]\s+(.+)$")


def _git(args: list[str], *, cwd: str | Path | None = None, timeout_s: float | None = None) -> str:
    """これは何をする関数？
    → git コマンドを実行し、標準出力を文字列で返します。
      git が無い/リポジトリ外/非ゼロ終了/タイムアウトは HistoryUnavailable にまとめます。
    """
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_s,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise HistoryUnavailable(f"git {args[0]} failed: {detail}") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise HistoryUnavailable(f"git {args[0]} could not run: {e}") from e
    return proc.stdout


def read_recent_history(cfg: HistoryConfig | None = None) -> str | None:
    """これは何をする関数？
    → 直近 cfg.limit 件のコミット（件名行＋ファイルごとの変更ステータス）を生テキストで返します。
      取得できないときは警告を出して None を返します（例外は外に出しません）。
    """
    cfg = cfg or HistoryConfig()
    args = ["log", "-n", str(cfg.limit), f"--pretty=format:{cfg.pretty_format}", "--name-status"]
    try:
        return _git(args, cwd=cfg.repo_dir, timeout_s=cfg.timeout_s)
    except HistoryUnavailable as e:
        logger.warning("Git not available or not a git repository. Using manual input instead. ({})", e)
        return None


def extract_changed_files(git_output: str | None) -> list[str]:
    """これは何をする関数？
    → git log の出力から A/M/D 行のパスだけを集め、初出順のまま重複を除いて返します。
      件名行や空行は黙って読み飛ばします。
    """
    if not git_output:
        return []

    files: dict[str, None] = {}
    for line in git_output.splitlines():
        m = STATUS_LINE_RE.match(line)
        if m:
            files.setdefault(m.group(1), None)
    return list(files)
