from __future__ import annotations

from datetime import date

from devlog.core.time import format_entry_date, local_today


def test_format_entry_date_iso_like() -> None:
    """YYYY-MM-DD のゼロ埋め形式になること"""
    assert format_entry_date(date(2024, 3, 5)) == "2024-03-05"


def test_format_entry_date_normalizes_separators() -> None:
    assert format_entry_date(date(2024, 12, 31), "%Y/%m/%d") == "2024-12-31"


def test_format_entry_date_defaults_to_today() -> None:
    assert format_entry_date() == local_today().strftime("%Y-%m-%d")
