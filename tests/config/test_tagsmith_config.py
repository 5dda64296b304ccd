"""Test configuration management."""

from pathlib import Path

import pytest

from tagsmith.config.config import DEFAULT_MODEL, Config
from tagsmith.config.paths import default_config_path, default_log_file
from tagsmith.shared.errors import ConfigError


def test_missing_file_creates_commented_defaults(portable_repo_root: Path) -> None:
    config = Config.load()

    path = portable_repo_root / "config" / "config.toml"
    assert default_config_path() == path.resolve()
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert 'provider = "ollama"' in text
    assert "# Model identifier passed to the backend" in text
    assert config.model == DEFAULT_MODEL
    assert config.updated_dir is None


def test_save_load_round_trip(portable_repo_root: Path) -> None:
    _ = portable_repo_root  # acknowledge fixture usage
    original = Config(
        model="mistral",
        server_url="http://gpu-box:11434",
        request_timeout=30.0,
        log_file=Path("/test/logs/tagsmith.log"),
        updated_dir=Path("/music/public/updated"),
    )
    original.save()

    Config._instance = None  # pyright: ignore[reportPrivateUsage] - reset singleton for test
    loaded = Config.load()

    assert loaded.model == "mistral"
    assert loaded.server_url == "http://gpu-box:11434"
    assert loaded.request_timeout == 30.0
    assert loaded.log_file == Path("/test/logs/tagsmith.log")
    assert loaded.updated_dir == Path("/music/public/updated")
    assert loaded.suggestions_dir is None


def test_singleton_behavior(portable_repo_root: Path) -> None:
    _ = portable_repo_root  # acknowledge fixture usage
    assert Config.load() is Config.load()


def test_unknown_keys_raise_config_error(portable_repo_root: Path) -> None:
    path = portable_repo_root / "config" / "config.toml"
    path.parent.mkdir(parents=True)
    _ = path.write_text('model = "x"\nbase_path = "/music"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="base_path"):
        _ = Config.load()


def test_invalid_toml_raises_config_error(portable_repo_root: Path) -> None:
    path = portable_repo_root / "config" / "config.toml"
    path.parent.mkdir(parents=True)
    _ = path.write_text("model = \n", encoding="utf-8")

    with pytest.raises(ConfigError):
        _ = Config.load()


def test_environment_overrides_locations(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TAGSMITH_CONFIG", str(tmp_path / "elsewhere.toml"))
    monkeypatch.setenv("TAGSMITH_LOG_DIR", str(tmp_path / "logdir"))

    assert default_config_path() == (tmp_path / "elsewhere.toml").resolve()
    assert default_log_file() == (tmp_path / "logdir" / "tagsmith.log").resolve()
