"""git 履歴の読み取りと変更ファイル抽出。"""
from .git import extract_changed_files, read_recent_history

__all__ = ["extract_changed_files", "read_recent_history"]
