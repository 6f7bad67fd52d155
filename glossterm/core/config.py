"""
Glossterm Configuration
Shortcode option layers, their merge, and process-wide settings
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional
import logging
import os

import yaml

from .exceptions import ConfigurationError
from .nodes import stringify

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "yes", "on", "1")
FALSE_VALUES = ("false", "no", "off", "0")

# Options the resolver reads itself; they are not configuration
RESOLVER_KEYS = ("table", "display", "def")


def parse_bool(value: Any) -> bool:
    """
    Interpret a boolean-like option value

    Args:
        value: A bool, or a string such as "true" or "false"

    Returns:
        The boolean value

    Raises:
        ConfigurationError: If the value is not boolean-like
    """
    if isinstance(value, bool):
        return value
    text = stringify(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Expected true or false, got {value!r}")


@dataclass
class GlossaryOptions:
    """One configuration layer; None means the layer does not set the field"""

    path: Optional[str] = None
    popup: Optional[str] = None
    show: Optional[bool] = None
    add_to_table: Optional[bool] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]], source: str = "options") -> "GlossaryOptions":
        """
        Build a layer from a raw option bag

        Args:
            options: Shortcode keyword arguments or the document's glossary block
            source: Label used in log messages

        Returns:
            GlossaryOptions with the recognised fields set
        """
        layer = cls()
        if not options:
            return layer

        if not isinstance(options, Mapping):
            logger.warning(f"Ignoring {source}: expected a mapping, got {type(options).__name__}")
            return layer

        known = {f.name for f in fields(cls)}
        for key, raw in options.items():
            if key in RESOLVER_KEYS:
                continue
            if key not in known:
                logger.debug(f"Ignoring unknown glossary option '{key}' in {source}")
                continue

            if key in ("show", "add_to_table"):
                try:
                    value = parse_bool(raw)
                except ConfigurationError as e:
                    raise ConfigurationError(f"Invalid value for '{key}' in {source}: {e}") from e
            elif key == "popup":
                value = stringify(raw).strip().lower()
            else:
                value = stringify(raw)

            setattr(layer, key, value)

        return layer


@dataclass
class ResolvedConfig:
    """Final configuration for one shortcode occurrence"""

    path: str = "glossary.yml"
    popup: str = "click"
    show: bool = True
    add_to_table: bool = True


DEFAULT_OPTIONS = GlossaryOptions(
    path="glossary.yml",
    popup="click",
    show=True,
    add_to_table=True,
)


def merge(defaults: GlossaryOptions,
          doc_level: Optional[GlossaryOptions] = None,
          call_level: Optional[GlossaryOptions] = None) -> ResolvedConfig:
    """
    Merge configuration layers field by field

    Call-level values win over document-level values, which win over defaults.
    """
    resolved = ResolvedConfig()
    for f in fields(ResolvedConfig):
        for layer in (call_level, doc_level, defaults):
            if layer is None:
                continue
            value = getattr(layer, f.name)
            if value is not None:
                setattr(resolved, f.name, value)
                break
    return resolved


@dataclass
class GlosstermSettings:
    """Process-wide settings for the filter and the command line"""

    definitions_path: str = "glossary.yml"
    backend: str = "html"
    popup: str = "click"
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self):
        """Override with environment variables if present"""
        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load configuration overrides from environment variables"""
        if os.getenv("GLOSSTERM_PATH"):
            self.definitions_path = os.getenv("GLOSSTERM_PATH")

        if os.getenv("GLOSSTERM_BACKEND"):
            self.backend = os.getenv("GLOSSTERM_BACKEND")

        # Debug override
        if os.getenv("GLOSSTERM_DEBUG", "").lower() in TRUE_VALUES:
            self.debug = True
            self.log_level = "DEBUG"

    def defaults(self) -> GlossaryOptions:
        """Library defaults with the configured definitions path"""
        return GlossaryOptions(
            path=self.definitions_path,
            popup=self.popup,
            show=DEFAULT_OPTIONS.show,
            add_to_table=DEFAULT_OPTIONS.add_to_table,
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "GlosstermSettings":
        """Load settings from a YAML file"""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(config_data) - known
        if unknown:
            logger.warning(f"Ignoring unknown settings in {config_path}: {', '.join(sorted(unknown))}")

        return cls(**{key: value for key, value in config_data.items() if key in known})

    def save_to_file(self, config_path: str):
        """Save settings to a YAML file"""
        config_data = {
            "definitions_path": self.definitions_path,
            "backend": self.backend,
            "popup": self.popup,
            "log_level": self.log_level,
            "debug": self.debug,
        }

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(config_data, f, default_flow_style=False, indent=2)
