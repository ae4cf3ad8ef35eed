# これは「devlog 全体で使う共通の例外クラス」を定義するファイルです。
from __future__ import annotations


class DevlogError(Exception):
    """devlog が意図して送出する例外の基底。"""


class HistoryUnavailable(DevlogError):
    """git が無い/リポジトリでない/コマンド失敗のとき。呼び出し側で握りつぶして空履歴に落とす。"""


class LogWriteError(DevlogError):
    """更新ログファイルの読み書きに失敗したときの例外。再試行はしない。"""


class InputExhausted(DevlogError, EOFError):
    """プロンプトの途中で入力が尽きた（EOF）ときの例外。書き込みは行わない。"""


class ConfigError(DevlogError):
    """設定ファイルや環境変数の不備があるときの例外。"""
