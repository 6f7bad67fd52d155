"""
Glossterm core engine
"""

from .config import GlossaryOptions, ResolvedConfig, GlosstermSettings, merge, parse_bool
from .exceptions import GlossaryError, DefinitionsFileError, ConfigurationError
from .registry import TermRegistry
from .renderers import Backend, get_renderer
from .resolver import RenderSession, resolve_shortcode
from .source import read_definitions

__all__ = [
    "GlossaryOptions",
    "ResolvedConfig",
    "GlosstermSettings",
    "merge",
    "parse_bool",
    "GlossaryError",
    "DefinitionsFileError",
    "ConfigurationError",
    "TermRegistry",
    "Backend",
    "get_renderer",
    "RenderSession",
    "resolve_shortcode",
    "read_definitions",
]
