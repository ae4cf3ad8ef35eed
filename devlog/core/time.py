# これは「エントリ見出し用のローカル日付」を提供するファイルです。
from __future__ import annotations

from datetime import date, datetime

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def local_today() -> date:
    """これは何をする関数？
    → ローカルタイムゾーンでの今日の日付を返します。
    """
    return datetime.now().astimezone().date()


def format_entry_date(day: date | None = None, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """これは何をする関数？
    → 日付を YYYY-MM-DD 形式の文字列にします（区切りの '/' は '-' に正規化）。
      - day: 省略時は local_today()
      - fmt: strftime 書式。ロケールに依存しない数値指定（%Y/%m/%d）を想定
    """
    if day is None:
        day = local_today()
    return day.strftime(fmt).replace("/", "-")
