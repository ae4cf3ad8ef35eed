from __future__ import annotations

# devlog 設定用の Pydantic モデル群（v2 対応）。
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_MARKER = "## Updates"


class UpdatesFileConfig(BaseModel):
    """更新ログ（Markdown）ファイルの場所とテンプレート設定。"""

    path: str = "cursor-updates.md"  # 相対パスはカレントディレクトリ基準で解決する
    marker: str = DEFAULT_MARKER  # 新しいエントリはこの見出し行の直後に入る
    title: str = "Cursor Updates Log"
    intro: str = "This file tracks significant changes to the Codebase Visualizer project."
    date_format: str = "%Y-%m-%d"

    def resolve_path(self, base_dir: str | Path | None = None) -> Path:
        """相対パスなら base_dir（省略時は CWD）に対して解決したパスを返す。"""

        p = Path(self.path).expanduser()
        if p.is_absolute():
            return p
        return Path(base_dir if base_dir is not None else Path.cwd()) / p

    def default_document(self) -> str:
        """ファイルが無いときに使うヘッダ付きの初期内容。"""

        return f"# {self.title}\n\n{self.intro}\n\n{self.marker}\n\n"


class HistoryConfig(BaseModel):
    """git 履歴の読み取り設定。"""

    limit: int = Field(default=10, ge=1)  # 直近何コミットを見るか
    pretty_format: str = "%h - %an, %ar : %s"
    timeout_s: float = Field(default=10.0, gt=0)
    repo_dir: str | None = None  # None ならカレントディレクトリ


class LoggingConfig(BaseModel):
    """loguru の出力設定。dir が None ならファイルには書かない。"""

    level: str = "INFO"
    dir: str | None = None
    debug_modules: list[str] = Field(default_factory=list)

    @field_validator("debug_modules", mode="before")
    @classmethod
    def _split_modules(cls, v: Any) -> Any:
        # ENV からは "a,b" 形式の文字列で来る
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v


class AppConfig(BaseModel):
    """アプリ全体の設定ルート（.env / YAML / 環境変数をマージして生成）。"""

    updates: UpdatesFileConfig = UpdatesFileConfig()
    history: HistoryConfig = HistoryConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = {
        "extra": "ignore",
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """生 dict から AppConfig を構築する。空セクション（YAML の `updates:` だけ等）は既定値扱い。"""

        payload = {k: v for k, v in dict(data).items() if v is not None}
        return cls.model_validate(payload)

    def to_dict(self) -> dict[str, Any]:
        """AppConfig を表示しやすい dict 形式に変換する。"""

        return self.model_dump(mode="python")
