"""Pytest configuration and fixtures."""

import pytest

from glossterm.core.config import GlosstermSettings
from glossterm.core.resolver import RenderSession

GLOSSARY_YAML = """\
# Tools
Cli: Command-line interface.
API: "Application Programming Interface."

# Data
big data: "Data sets too large for *one* machine."
quote: "It's quoted."
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GLOSSTERM_* variables from the caller's shell out of the tests."""
    for name in ("GLOSSTERM_PATH", "GLOSSTERM_BACKEND", "GLOSSTERM_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def glossary_file(tmp_path):
    """A definitions file with mixed-case keys."""
    path = tmp_path / "glossary.yml"
    path.write_text(GLOSSARY_YAML, encoding="utf-8")
    return path


@pytest.fixture
def settings(glossary_file):
    return GlosstermSettings(definitions_path=str(glossary_file))


@pytest.fixture
def html_session(settings):
    """Fresh HTML session; nothing is shared between tests."""
    return RenderSession(backend="html", settings=settings, seed=7)


@pytest.fixture
def latex_session(settings):
    return RenderSession(backend="latex", settings=settings, seed=7)
