# このモジュールは「.env + YAML + 環境変数 から AppConfig を構築する」ためのヘルパーです。
# 優先順位は「環境変数 > .env > YAML > デフォルト値」となります。
from __future__ import annotations

import os
from io import StringIO  # テキストをストリーム化して python-dotenv に渡すために使用
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]
from dotenv import dotenv_values
from pydantic import ValidationError

from devlog.core.errors import ConfigError

from .models import AppConfig

DOTENV_PREFIX = "DEVLOG_"
ENV_PREFIX = "DEVLOG__"
CONFIG_FILE_ENV = "DEVLOG_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "config/devlog.yaml"


def _set_nested(d: dict[str, Any], keys: list[str], value: Any) -> None:
    """['updates','path'] のようなキー列で入れ子 dict に値を設定する。"""

    cur = d
    for k in keys[:-1]:
        if k not in cur or not isinstance(cur[k], dict):
            cur[k] = {}
        cur = cur[k]
    cur[keys[-1]] = value


def _env_to_nested_dict(environ: Mapping[str, str]) -> dict[str, Any]:
    """DEVLOG__UPDATES__PATH のような ENV を AppConfig 互換のネスト辞書に変換する。

    UPDATES / HISTORY / LOGGING セクション配下のキーだけを取り込む。
    """

    result: dict[str, Any] = {}
    allowed_roots = {"UPDATES", "HISTORY", "LOGGING"}

    for raw_key, raw_val in environ.items():
        if not raw_key.startswith(ENV_PREFIX):
            continue
        parts = raw_key[len(ENV_PREFIX) :].split("__")
        if len(parts) < 2 or parts[0] not in allowed_roots:
            continue
        _set_nested(result, [p.lower() for p in parts], raw_val)
    return result


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """dict の深いマージ: override の内容で base を上書きして返す。"""

    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_update(base[k], v)
        else:
            base[k] = v
    return base


def load_dotenv_settings(dotenv_path: Path) -> dict[str, str]:
    """.env から DEVLOG_ で始まるキーだけを読み、未設定のものを os.environ に補完する。

    既に環境変数にあるキーは上書きしない（環境変数 > .env）。BOM 付き UTF-8 も読める。
    書式は python-dotenv に任せる（'export KEY=VAL' も可）。
    """

    try:
        text = dotenv_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeError) as e:
        raise ConfigError(f"cannot read {dotenv_path}: {e}") from e

    values = {
        k: v for k, v in dotenv_values(stream=StringIO(text)).items() if v is not None and k.startswith(DOTENV_PREFIX)
    }
    for k, v in values.items():
        os.environ.setdefault(k, v)
    return values


def _read_yaml(cfg_path: Path) -> dict[str, Any]:
    """YAML を dict として読む。ファイルが無ければ空 dict。"""

    if not cfg_path.exists():
        return {}
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config file {cfg_path}: {e}") from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"config file {cfg_path} must contain a mapping, got {type(loaded).__name__}")
    return loaded


def load_config(config_path: str | os.PathLike[str] | None = None) -> AppConfig:
    """`.env` と YAML と環境変数を読み込み、AppConfig を構築して返す。

    優先順位:
        1. 既存の環境変数（pytest の monkeypatch などを含む）
        2. .env ファイル（既存の環境変数を上書きしない）
        3. YAML (`config/devlog.yaml` など)
        4. AppConfig のデフォルト値
    """

    load_dotenv_settings(Path(".env"))

    if config_path is not None:
        cfg_path = Path(config_path)
    else:
        cfg_path = Path(os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE))

    yaml_data = _read_yaml(cfg_path)
    env_data = _env_to_nested_dict(os.environ)
    merged = _deep_update(dict(yaml_data), env_data)

    try:
        return AppConfig.from_dict(merged)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
