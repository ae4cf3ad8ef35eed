from __future__ import annotations

import logging  # 標準logging→loguruブリッジ用
import os
import sys
from pathlib import Path
from types import FrameType
from typing import Iterable

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"
FILE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | {name}:{function}:{line} | {message}"
)


def _parse_debug_modules(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """LOG_DEBUG_MODULES などで DEBUG を出したいモジュール名を取り出す。"""

    if raw is None:
        return ()
    if isinstance(raw, str):
        items = [x.strip() for x in raw.split(",")]
    else:
        items = [str(x).strip() for x in raw]
    return tuple(x for x in items if x)


def _level_filter_factory(base_level_no: int, debug_modules: tuple[str, ...]):
    """基準レベル以上は通し、DEBUG は debug_modules に一致するものだけ通すフィルタを作る。"""

    debug_no = logger.level("DEBUG").no

    def _filter(record: dict) -> bool:
        level_no = record["level"].no
        if level_no >= base_level_no:
            return True
        if level_no == debug_no and debug_modules:
            name = record["extra"].get("origin") or record.get("name")
            return any(name and name.startswith(m) for m in debug_modules)
        return False

    return _filter


class InterceptHandler(logging.Handler):
    """標準loggingのレコードをloguruへ転送する中継ハンドラ。"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(origin=record.name).opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _inject_origin(record: dict) -> None:
    """loguru直書きログにも origin を付与するパッチャ。"""

    extra = record["extra"]
    if "origin" not in extra:
        extra["origin"] = record["name"]


def setup_std_logging_bridge() -> None:
    """標準loggingのrootにInterceptHandlerを足してloguruへ橋渡しする。"""

    root = logging.getLogger()
    if not any(isinstance(h, InterceptHandler) for h in root.handlers):
        root.handlers.append(InterceptHandler())
    root.setLevel(logging.NOTSET)
    logging.captureWarnings(True)


def setup_logging(
    *,
    level: str = "INFO",
    log_dir: str | None = None,
    human_filename: str = "devlog.log",
    json_filename: str = "devlog.jsonl",
    debug_modules: Iterable[str] | None = None,
) -> None:
    """Initialize console logging and, optionally, log files.

    The console sink writes to stderr so it never mixes with prompts on stdout.
    When `log_dir` is given, two sinks are added under it:
      1) Human-readable: devlog.log (daily rotation, keep 10 files)
      2) JSON structured: devlog.jsonl (daily rotation, keep 10 files)
    """
    logger.configure(patcher=_inject_origin)  # type: ignore[arg-type]
    logger.remove()

    normalized_level = level.upper()
    try:
        base_level_no = logger.level(normalized_level).no
    except ValueError:
        normalized_level = "INFO"
        base_level_no = logger.level("INFO").no
    debug_modules_raw = debug_modules if debug_modules is not None else os.getenv("LOG_DEBUG_MODULES")
    debug_modules_tuple = _parse_debug_modules(debug_modules_raw)
    level_filter = _level_filter_factory(base_level_no, debug_modules_tuple)

    logger.add(
        sys.stderr,
        level="DEBUG",
        backtrace=False,
        diagnose=False,
        format=CONSOLE_FORMAT,
        filter=level_filter,
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path / human_filename),
            level="DEBUG",
            rotation="00:00",
            retention=10,
            backtrace=True,
            diagnose=False,
            encoding="utf-8",
            format=FILE_FORMAT,
            filter=level_filter,
        )
        logger.add(
            str(log_path / json_filename),
            level="DEBUG",
            rotation="00:00",
            retention=10,
            backtrace=True,
            diagnose=False,
            encoding="utf-8",
            serialize=True,
            filter=level_filter,
        )

    setup_std_logging_bridge()

    logger.debug(
        "logging init level={} dir={} mods={}",
        normalized_level,
        log_dir,
        debug_modules_tuple,
    )
