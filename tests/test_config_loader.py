"""設定ローダのテスト。
YAML を読み、環境変数で上書きでき、不正な設定は ConfigError になることを検証する。
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

pytest.importorskip("yaml")

from devlog.config.loader import load_config
from devlog.core.errors import ConfigError


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DEVLOG_CONFIG_FILE", raising=False)
    for key in [k for k in os.environ if k.startswith("DEVLOG__")]:
        monkeypatch.delenv(key)
    yield
    # .env 経由で os.environ に入ったキーを掃除する
    for key in [k for k in os.environ if k.startswith("DEVLOG__")]:
        del os.environ[key]


def test_defaults_without_any_config() -> None:
    cfg = load_config()
    assert cfg.updates.path == "cursor-updates.md"
    assert cfg.updates.marker == "## Updates"
    assert cfg.history.limit == 10
    assert cfg.logging.dir is None


def test_load_config_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "devlog.yaml").write_text(
        "\n".join(
            [
                "updates:",
                "  path: docs/updates.md",
                "  title: Project Updates",
                "history:",
                "  limit: 5",
                "logging:",
                "  level: DEBUG",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("DEVLOG__HISTORY__LIMIT", "20")
    monkeypatch.setenv("DEVLOG__LOGGING__DEBUG_MODULES", "devlog.history,devlog.writer")

    cfg = load_config()

    assert cfg.updates.path == "docs/updates.md"
    assert cfg.updates.title == "Project Updates"
    assert cfg.history.limit == 20
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.debug_modules == ["devlog.history", "devlog.writer"]


def test_dotenv_does_not_override_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text(
        "\ufeffexport DEVLOG__UPDATES__PATH=from-dotenv.md\n"
        "DEVLOG__UPDATES__TITLE=Dotenv Title\n"
        "UNRELATED_DOTENV_KEY=ignored\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DEVLOG__UPDATES__PATH", "from-env.md")
    monkeypatch.delenv("UNRELATED_DOTENV_KEY", raising=False)

    cfg = load_config()

    assert cfg.updates.path == "from-env.md"
    assert cfg.updates.title == "Dotenv Title"
    assert "UNRELATED_DOTENV_KEY" not in os.environ


def test_explicit_config_path(tmp_path: Path) -> None:
    p = tmp_path / "custom.yaml"
    p.write_text("updates:\n  marker: '## Changes'\n", encoding="utf-8")
    assert load_config(p).updates.marker == "## Changes"


def test_empty_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    p = tmp_path / "empty.yaml"
    p.write_text("updates:\nhistory:\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.updates.path == "cursor-updates.md"


@pytest.mark.parametrize("text", ["- just\n- a list\n", "history:\n  limit: 0\n", "history: [unclosed\n"])
def test_invalid_config_raises_config_error(tmp_path: Path, text: str) -> None:
    p = tmp_path / "bad.yaml"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(p)
