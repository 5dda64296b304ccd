"""Configuration management for tagsmith."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from tagsmith.config.file_ops import write_text_file
from tagsmith.config.paths import default_config_path
from tagsmith.platform.logging import logger
from tagsmith.shared.errors import ConfigError

DEFAULT_PROVIDER: Final[str] = "ollama"
DEFAULT_MODEL: Final[str] = "llama3.2"
DEFAULT_SERVER_URL: Final[str] = "http://localhost:11434"
REQUEST_TIMEOUT_DEFAULT: Final[float] = 120.0
CONNECT_TIMEOUT_DEFAULT: Final[float] = 5.0
FILE_HASH_CHUNK_SIZE_DEFAULT: Final[int] = 1024 * 1024


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Model backend selection
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    server_url: str = DEFAULT_SERVER_URL

    # Bounded waits for the model server, in seconds
    request_timeout: float = REQUEST_TIMEOUT_DEFAULT
    connect_timeout: float = CONNECT_TIMEOUT_DEFAULT

    # Log file path
    log_file: Path | None = _path_field()

    # Output locations; derived from each source file's location when unset
    suggestions_dir: Path | None = _path_field()
    updated_dir: Path | None = _path_field()

    file_hash_chunk_size: int = FILE_HASH_CHUNK_SIZE_DEFAULT

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

    def save(self, target: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            destination = target or default_config_path()
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# tagsmith configuration file")
        lines.append("")

        lines.append("# Model backend (currently: ollama)")
        lines.append(f"provider = {self._format_toml_value(config['provider'])}")
        lines.append("# Model identifier passed to the backend")
        lines.append(f"model = {self._format_toml_value(config['model'])}")
        lines.append("# Address of the locally hosted model server")
        lines.append(f"server_url = {self._format_toml_value(config['server_url'])}")
        lines.append("")

        lines.append("# Seconds to wait for a model reply / for the connection")
        lines.append(f"request_timeout = {self._format_toml_value(config['request_timeout'])}")
        lines.append(f"connect_timeout = {self._format_toml_value(config['connect_timeout'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/tagsmith.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Where suggestion reports and updated audio files go (optional)")
        lines.append("# Defaults: siblings of an 'originals' directory, else subdirectories")
        lines.append("# next to the source file")
        lines.append('# Example: suggestions_dir = "/music/public/suggestions"')
        if config["suggestions_dir"] is not None:
            lines.append(
                f"suggestions_dir = {self._format_toml_value(config['suggestions_dir'])}"
            )
        lines.append('# Example: updated_dir = "/music/public/updated"')
        if config["updated_dir"] is not None:
            lines.append(f"updated_dir = {self._format_toml_value(config['updated_dir'])}")
        lines.append("")

        lines.append("# Chunk size in bytes used when hashing audio files")
        lines.append(
            f"file_hash_chunk_size = {self._format_toml_value(config['file_hash_chunk_size'])}"
        )
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _format_toml_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, creating a default one when missing.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigError: If the file is not valid TOML or holds unknown keys.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        if not config_file.exists():
            instance = cls()
            try:
                instance.save(config_file)
                logger.debug("Created default configuration at %s", config_file)
            except OSError as exc:
                logger.warning("Could not write default configuration: %s", exc)
            cls._instance = instance
            cls._loaded_from = config_file
            return instance

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.error("Failed to load configuration: %s", exc)
            raise ConfigError(f"Cannot read {config_file}: {exc}") from exc

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys in {config_file}: {', '.join(unknown)}")

        logger.debug("Configuration loaded from %s", config_file)
        instance = cls(**config_dict)
        cls._instance = instance
        cls._loaded_from = config_file
        return instance


__all__ = [
    "CONNECT_TIMEOUT_DEFAULT",
    "Config",
    "DEFAULT_MODEL",
    "DEFAULT_PROVIDER",
    "DEFAULT_SERVER_URL",
    "FILE_HASH_CHUNK_SIZE_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
]
