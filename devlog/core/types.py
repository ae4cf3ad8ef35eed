from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PromptKind(str, Enum):
    LINE = "line"  # 1行そのまま
    CONFIRM = "confirm"  # y/n
    CSV = "csv"  # カンマ区切りのファイル一覧
    MULTILINE = "multiline"  # "." 単独行で終わる複数行


@dataclass
class ChangeRecord:
    """1回の実行で集めた更新内容。レンダリング後のテキストだけがファイルに残る。"""

    title: str
    files: list[str] = field(default_factory=list)
    description: str = ""  # "- 行\n" の箇条書きに整形済み
    notes: str = ""
