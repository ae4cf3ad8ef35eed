from __future__ import annotations

import logging
from pathlib import Path

import pytest

pytest.importorskip("loguru")

from loguru import logger

from devlog.core.logging import _parse_debug_modules, setup_logging


def test_setup_logging_creates_files(tmp_path: Path) -> None:
    """log_dir を指定するとファイル（人向け/JSON）が作られること"""
    setup_logging(level="INFO", log_dir=str(tmp_path / "logs"))
    assert (tmp_path / "logs" / "devlog.log").exists()
    assert (tmp_path / "logs" / "devlog.jsonl").exists()


def test_setup_logging_console_only(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    setup_logging(level="WARNING")
    assert list(tmp_path.iterdir()) == []


def test_std_logging_is_bridged_to_loguru() -> None:
    setup_logging(level="INFO")
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        logging.getLogger("some.library").warning("from stdlib")
    finally:
        logger.remove(sink_id)
    assert any("from stdlib" in m for m in messages)


def test_parse_debug_modules() -> None:
    assert _parse_debug_modules(None) == ()
    assert _parse_debug_modules(" devlog.history , ,devlog.writer") == ("devlog.history", "devlog.writer")
    assert _parse_debug_modules(["a", " b "]) == ("a", "b")
