"""
Configuration loader for helperkit.

Loads settings from YAML config file with sensible defaults.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".helperkit" / "config.yaml"


def _coerce(default: Any, value: Any) -> Any:
    """Convert a YAML value to the type of the setting's default."""
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError(value)
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError(value)
        return int(value)
    if isinstance(value, (dict, list)) or value is None:
        raise TypeError(value)
    return str(value)


@dataclass
class ProgressConfig:
    """Defaults for terminal progress bars."""
    bar_width: int = 25
    label: str = "Progress"
    show_progress: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: str = ""
    console: bool = True


@dataclass
class CultureConfig:
    """Culture used when no culture scope is active."""
    default_culture: str = "en_US"


@dataclass
class XmlConfig:
    """Configuration for XML schema validation."""
    fail_fast: bool = False  # stop at the first mismatch instead of reporting all


@dataclass
class Config:
    """Main configuration container."""
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    culture: CultureConfig = field(default_factory=CultureConfig)
    xml: XmlConfig = field(default_factory=XmlConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from YAML file.

        If no path is provided, uses default values.
        Missing keys in the config file will use defaults. Unknown keys,
        and values that cannot be converted to the setting's type, are
        logged and ignored.
        """
        config = cls()

        if config_path and config_path.exists():
            logger.info(f"Loading configuration from {config_path}")
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                logger.warning(f"Ignoring {config_path}: expected a mapping at the top level")
                data = {}

            for section in fields(config):
                values = data.get(section.name)
                if not isinstance(values, dict):
                    continue
                target = getattr(config, section.name)
                for key, value in values.items():
                    if not hasattr(target, key):
                        logger.warning(f"Ignoring unknown setting {section.name}.{key}")
                        continue
                    try:
                        setattr(target, key, _coerce(getattr(target, key), value))
                    except (TypeError, ValueError):
                        logger.warning(
                            f"Ignoring {section.name}.{key}: expected "
                            f"{type(getattr(target, key)).__name__}, got {value!r}"
                        )

        return config

    def setup_logging(self, force: bool = False) -> None:
        """Configure logging based on settings."""
        from .logging_config import setup_logging

        setup_logging(
            level=self.logging.level,
            log_file=self.logging.log_file or None,
            console=self.logging.console,
            force=force,
        )

    def save(self, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        data = asdict(self)
        logger.info(f"Saving configuration to {config_path}")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False)
