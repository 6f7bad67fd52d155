"""
Glossterm Output Renderers
One renderer per backend: interactive HTML popovers, or structural
spans, footnotes and definition lists for every other format
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple, Union

from .exceptions import ConfigurationError
from .markup import parse_blocks, parse_inlines
from .nodes import Block, DefinitionList, Inline, Note, RawBlock, RawInline, Span, clone

if TYPE_CHECKING:
    from .resolver import RenderSession

logger = logging.getLogger(__name__)

HTML_FORMATS = ("html", "html4", "html5", "revealjs", "dashboard")


class Backend(Enum):
    """Output backends the filter distinguishes"""
    HTML = "html"
    STRUCTURAL = "structural"

    @classmethod
    def from_format(cls, fmt: Union[str, "Backend"]) -> "Backend":
        """
        Map a pipeline output format name to a backend

        Args:
            fmt: Format name such as "html", "latex" or "docx"

        Returns:
            Backend.HTML for hypertext formats, Backend.STRUCTURAL otherwise
        """
        if isinstance(fmt, Backend):
            return fmt
        name = (fmt or "").strip().lower()
        if not name:
            raise ConfigurationError("Output format must not be empty")
        if name == cls.STRUCTURAL.value:
            return cls.STRUCTURAL
        base = name.split("+", 1)[0].split("-", 1)[0]
        return cls.HTML if base in HTML_FORMATS else cls.STRUCTURAL


@dataclass
class HTMLDependency:
    """Stylesheets and scripts a page needs for the popovers"""
    name: str
    stylesheets: List[str] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)


GLOSSARY_DEPENDENCY = HTMLDependency(
    name="glossary",
    stylesheets=["glossary.css"],
    scripts=["glossary.js"],
)

BUTTON_TEMPLATE = (
    "<button class='glossary' "
    "id='{id}' "
    "data-bs-toggle='popover' "
    "data-bs-content='{definition}' "
    "data-bs-trigger='click' "
    "data-bs-placement='top' "
    "tabindex='0' "
    "data-glossary-term='{term}'>"
    "{display}</button>"
)


def quote_attribute(value: str) -> str:
    """Escape text for a single-quoted HTML attribute"""
    return value.replace("&", "&amp;").replace("'", "&apos;")


def make_slug(term: str) -> str:
    """Collapse whitespace to dashes and drop anything not alphanumeric or a dash"""
    slug = re.sub(r"\s+", "-", term)
    return re.sub(r"[^A-Za-z0-9-]", "", slug)


class OutputRenderer(ABC):
    """Renders a resolved term or the aggregate table for one backend"""

    backend: Backend

    def prepare(self, session: "RenderSession"):
        """Hook run once per shortcode before anything is rendered"""

    @abstractmethod
    def render_term(self, term: str, display: str, definition: str, popup: str,
                    session: "RenderSession") -> Union[Inline, List[Inline]]:
        """Render one term occurrence"""

    @abstractmethod
    def render_table(self, entries: List[Tuple[str, str]]) -> Block:
        """Render the sorted (term, definition) entries"""


class HTMLRenderer(OutputRenderer):
    """Bootstrap popover buttons and a raw HTML table"""

    backend = Backend.HTML

    def prepare(self, session: "RenderSession"):
        session.add_dependency(GLOSSARY_DEPENDENCY)

    def render_term(self, term, display, definition, popup, session):
        if popup == "none" or not definition:
            return RawInline("html", f"<span class='glossary'>{display}</span>")

        # Any other mode, including the retired "hover", opens on click
        if popup != "click":
            logger.debug(f"Popup mode '{popup}' rendered as click")

        glossary_id = session.new_id(make_slug(term))
        button = BUTTON_TEMPLATE.format(
            id=glossary_id,
            definition=definition.replace("'", "&apos;"),
            term=quote_attribute(term),
            display=display,
        )
        return RawInline("html", button)

    def render_table(self, entries):
        rows = ["<table class='glossary_table'>\n",
                "<tr><th> Term </th><th> Definition </th></tr>\n"]
        for term, definition in entries:
            rows.append(f"<tr><td>{term}</td><td>{definition}</td></tr>\n")
        rows.append("</table>")
        return RawBlock("html", "".join(rows))


class StructuralRenderer(OutputRenderer):
    """Plain spans with footnotes, and a definition list for the table"""

    backend = Backend.STRUCTURAL

    def render_term(self, term, display, definition, popup, session):
        inlines = parse_inlines(display)
        blocks = parse_blocks(definition)
        if popup == "none" or not blocks:
            return Span(inlines)

        # The note goes on a copy; the parsed display inlines stay untouched
        annotated = clone(inlines)
        annotated.append(Note(blocks))
        return Span(annotated)

    def render_table(self, entries):
        items = []
        for term, definition in entries:
            items.append((parse_inlines(term), [parse_blocks(definition)]))
        return DefinitionList(items)


RENDERERS = {
    Backend.HTML: HTMLRenderer,
    Backend.STRUCTURAL: StructuralRenderer,
}


def get_renderer(backend: Union[str, Backend]) -> OutputRenderer:
    """Get the renderer for a backend or output format name"""
    return RENDERERS[Backend.from_format(backend)]()
