"""
Glossterm Exceptions
Error hierarchy raised by the glossary filter
"""

from typing import Optional


class GlossaryError(Exception):
    """Base exception for all glossary filter errors"""


class DefinitionsFileError(GlossaryError, OSError):
    """Definitions file could not be opened or read"""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Cannot open definitions file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigurationError(GlossaryError, ValueError):
    """An option value could not be interpreted"""
