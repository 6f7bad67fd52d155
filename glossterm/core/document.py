"""
Glossterm Document Host
Finds glossary shortcodes in a Markdown document and expands them in place
"""

import logging
import re
import shlex
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ConfigurationError
from .nodes import HTMLWriter, MarkdownWriter, as_list
from .renderers import HTMLDependency
from .resolver import RenderSession, resolve_shortcode
from .source import split_front_matter

logger = logging.getLogger(__name__)

SHORTCODE_RE = re.compile(r"\{\{<\s*glossary(?P<args>(?:\s.*?)?)\s*>\}\}", re.DOTALL)

NOTE_PREFIX = "glossary-"


@dataclass
class RenderedDocument:
    """Result of expanding the shortcodes of one document"""
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    dependencies: List[HTMLDependency] = field(default_factory=list)
    occurrences: int = 0


def parse_shortcode_args(raw: str) -> Tuple[List[str], Dict[str, Any]]:
    """
    Split shortcode arguments into positional and named ones

    The first bare word is the term. key=value pairs are named options, and
    bare words after the term are presence flags such as table.

    Args:
        raw: Everything between "glossary" and the closing delimiter

    Returns:
        Tuple of (args, kwargs)
    """
    try:
        tokens = shlex.split(raw)
    except ValueError as e:
        raise ConfigurationError(f"Cannot parse glossary shortcode arguments '{raw.strip()}': {e}") from e

    args: List[str] = []
    kwargs: Dict[str, Any] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        if sep and key and re.fullmatch(r"[A-Za-z_][\w-]*", key):
            kwargs[key] = value
        elif not args:
            args.append(token)
        else:
            kwargs[token] = True

    return args, kwargs


def render_document(text: str, session: RenderSession) -> RenderedDocument:
    """
    Expand every glossary shortcode in a Markdown document

    Shortcodes are resolved in document order. Front matter is kept as is and
    its glossary block supplies document-level defaults.

    Args:
        text: Markdown source
        session: The rendering run this document belongs to

    Returns:
        RenderedDocument with the expanded text

    Raises:
        DefinitionsFileError: If a definitions file cannot be read; the
            document is abandoned
    """
    session.begin_document()
    metadata, body = split_front_matter(text)
    front = text[:len(text) - len(body)]

    if session.is_html:
        writer = HTMLWriter()
    else:
        writer = MarkdownWriter(note_prefix=NOTE_PREFIX)

    occurrences = 0

    def expand(match: "re.Match") -> str:
        nonlocal occurrences
        args, kwargs = parse_shortcode_args(match.group("args"))
        node = resolve_shortcode(args, kwargs, metadata, session)
        occurrences += 1
        return writer.write(as_list(node))

    expanded = SHORTCODE_RE.sub(expand, body)

    notes = writer.footnotes()
    if notes:
        expanded = expanded.rstrip("\n") + "\n\n" + notes + "\n"

    logger.info(f"Expanded {occurrences} glossary shortcodes")
    return RenderedDocument(
        text=front + expanded,
        metadata=metadata,
        dependencies=list(session.dependencies.values()),
        occurrences=occurrences,
    )


def dependency_tags(dependencies: List[HTMLDependency], prefix: Optional[str] = None) -> str:
    """HTML link and script tags for registered dependencies"""
    base = f"{prefix.rstrip('/')}/" if prefix else ""
    tags = []
    for dependency in dependencies:
        for stylesheet in dependency.stylesheets:
            tags.append(f'<link rel="stylesheet" href="{base}{stylesheet}">')
        for script in dependency.scripts:
            tags.append(f'<script src="{base}{script}"></script>')
    return "\n".join(tags)
