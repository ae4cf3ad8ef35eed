"""このモジュールは『更新ログ（cursor-updates.md）に対話でエントリを追加する』CLI です。

git 履歴 → 変更ファイル抽出 → 対話入力 → Markdown 書き込み、の順に1回だけ実行します。
引数は不要です（--config / --answers は任意）。
"""

from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from devlog.collect.prompts import ConsoleInput, LineSource, StreamInput, collect_change
from devlog.config.loader import load_config
from devlog.config.models import AppConfig
from devlog.core.errors import ConfigError, InputExhausted
from devlog.core.logging import setup_logging
from devlog.history import extract_changed_files, read_recent_history
from devlog.writer.markdown import UpdatesLogWriter


def run(cfg: AppConfig, source: LineSource, *, echo=print) -> bool:
    """これは何をする関数？
    → 履歴読み取りから書き込みまでを順番に実行し、書き込めたら True を返します。
      git が使えない場合は空のファイル一覧で続行します。
    """

    recent = read_recent_history(cfg.history)
    changed_files = extract_changed_files(recent)
    logger.debug("detected {} changed files from history", len(changed_files))

    echo("📝 Updating Cursor Updates Log")
    record = collect_change(source, changed_files, echo=echo)

    writer = UpdatesLogWriter(cfg.updates)
    return writer.update(record, echo=echo)


def main() -> None:
    parser = argparse.ArgumentParser(description="Append an entry to the markdown updates log")
    parser.add_argument("--config", type=str, default=None, help="YAML設定ファイルのパス(省略可)")
    parser.add_argument(
        "--answers", type=str, default=None, help="回答を1行ずつ書いたファイル(省略時は端末から入力)"
    )
    args = parser.parse_args()

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error("Error: {}", e)
        return
    setup_logging(level=cfg.logging.level, log_dir=cfg.logging.dir, debug_modules=cfg.logging.debug_modules or None)

    answers_file = None
    if args.answers:
        try:
            answers_file = Path(args.answers).open("r", encoding="utf-8")
        except OSError as e:
            logger.error("Error: cannot read answers file: {}", e)
            return

    try:
        source: LineSource = StreamInput(answers_file) if answers_file is not None else ConsoleInput()
        run(cfg, source)
    except InputExhausted as e:
        logger.error("Error: {}", e)
    except KeyboardInterrupt:
        print()
        logger.warning("interrupted; nothing was written")
    finally:
        if answers_file is not None:
            answers_file.close()


if __name__ == "__main__":
    main()
