"""
Glossterm Shortcode Resolver
Entry point for each glossary shortcode occurrence
"""

import itertools
import logging
import random
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .config import GlossaryOptions, GlosstermSettings, merge
from .exceptions import ConfigurationError
from .nodes import stringify
from .registry import TermRegistry
from .renderers import Backend, HTMLDependency, get_renderer
from .source import lookup_definition

logger = logging.getLogger(__name__)

ID_DRAWS = 20


class RenderSession:
    """
    State for one rendering run

    Holds the term registry shared by every document in the run, the renderer
    for the target backend, the HTML dependencies registered for the current
    document and the element ids already handed out.
    """

    def __init__(self,
                 backend: Union[str, Backend] = Backend.HTML,
                 registry: Optional[TermRegistry] = None,
                 settings: Optional[GlosstermSettings] = None,
                 seed: Optional[int] = None):
        self.backend = Backend.from_format(backend)
        self.renderer = get_renderer(self.backend)
        self.registry = registry if registry is not None else TermRegistry()
        self.settings = settings or GlosstermSettings()
        self.dependencies: Dict[str, HTMLDependency] = {}
        self._ids = set()
        self._random = random.Random(seed)
        self._fallback = itertools.count(10000)

    @property
    def is_html(self) -> bool:
        return self.backend is Backend.HTML

    def begin_document(self):
        """Forget the dependencies and ids handed out for the previous document"""
        self.dependencies = {}
        self._ids = set()

    def add_dependency(self, dependency: HTMLDependency) -> bool:
        """
        Register an HTML dependency for the current document

        Returns:
            True if it was not registered yet
        """
        if dependency.name in self.dependencies:
            return False
        self.dependencies[dependency.name] = dependency
        logger.debug(f"Registered HTML dependency '{dependency.name}'")
        return True

    def new_id(self, slug: str) -> str:
        """
        Element id for a term occurrence, never repeated within a document

        The suffix is a random number in 1000..9999. Once ID_DRAWS draws in a
        row are taken, a session counter starting at 10000 is used instead.
        """
        for _ in range(ID_DRAWS):
            candidate = f"glossary-{slug}-{self._random.randint(1000, 9999)}"
            if candidate not in self._ids:
                break
        else:
            candidate = f"glossary-{slug}-{next(self._fallback)}"
        self._ids.add(candidate)
        return candidate


def resolve_shortcode(args: Sequence[Any],
                      kwargs: Mapping[str, Any],
                      meta: Optional[Mapping[str, Any]],
                      session: RenderSession):
    """
    Resolve one glossary shortcode and render it

    Args:
        args: Positional arguments; the first is the term as written
        kwargs: Named options (display, def, path, popup, show, add_to_table, table)
        meta: Document metadata; its "glossary" block supplies defaults
        session: The current rendering run

    Returns:
        An inline node for a term, or a block node for the table

    Raises:
        DefinitionsFileError: If the definitions file has to be read and cannot be
        ConfigurationError: If the term is missing or an option is invalid
    """
    kwargs = kwargs or {}
    renderer = session.renderer
    renderer.prepare(session)

    if "table" in kwargs:
        entries = session.registry.snapshot_sorted()
        logger.debug(f"Rendering glossary table with {len(entries)} terms")
        return renderer.render_table(entries)

    if not args:
        raise ConfigurationError("The glossary shortcode needs a term")

    display = stringify(args[0])
    term = display.lower()

    if "display" in kwargs:
        display = stringify(kwargs["display"])

    doc_options = (meta or {}).get("glossary")
    config = merge(
        session.settings.defaults(),
        GlossaryOptions.from_mapping(doc_options, "document metadata"),
        GlossaryOptions.from_mapping(kwargs, "shortcode options"),
    )

    if "def" in kwargs:
        definition = stringify(kwargs["def"])
    else:
        definition = lookup_definition(config.path, term) or ""

    if config.add_to_table:
        session.registry.record(term, definition)

    return renderer.render_term(term, display, definition, config.popup, session)

