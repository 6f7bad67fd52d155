"""
Glossterm Document Model
Inline and block nodes exchanged with the rendering pipeline, plus
plain-text, HTML and Markdown writers for them
"""

import copy
from dataclasses import dataclass, field
from html import escape as html_escape
from typing import Any, List, Optional, Tuple, Union


# Inline nodes

@dataclass
class Str:
    text: str


@dataclass
class Space:
    pass


@dataclass
class SoftBreak:
    pass


@dataclass
class Emph:
    content: List["Inline"] = field(default_factory=list)


@dataclass
class Strong:
    content: List["Inline"] = field(default_factory=list)


@dataclass
class Code:
    text: str


@dataclass
class Link:
    content: List["Inline"]
    url: str
    title: str = ""


@dataclass
class Span:
    content: List["Inline"] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)


@dataclass
class Note:
    """Footnote attached at the position it appears in"""
    blocks: List["Block"] = field(default_factory=list)


@dataclass
class RawInline:
    format: str
    text: str


# Block nodes

@dataclass
class Para:
    content: List["Inline"] = field(default_factory=list)


@dataclass
class Plain:
    content: List["Inline"] = field(default_factory=list)


@dataclass
class BulletList:
    items: List[List["Block"]] = field(default_factory=list)


@dataclass
class RawBlock:
    format: str
    text: str


@dataclass
class DefinitionList:
    """Each item pairs term inlines with one or more block definitions"""
    items: List[Tuple[List["Inline"], List[List["Block"]]]] = field(default_factory=list)


Inline = Union[Str, Space, SoftBreak, Emph, Strong, Code, Link, Span, Note, RawInline]
Block = Union[Para, Plain, BulletList, RawBlock, DefinitionList]

BLOCK_TYPES = (Para, Plain, BulletList, RawBlock, DefinitionList)


def stringify(value: Any) -> str:
    """
    Flatten nodes, node lists or plain YAML scalars to text

    Args:
        value: A node, a list of nodes, or a scalar loaded from YAML

    Returns:
        Plain text with all markup dropped
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, BLOCK_TYPES) for item in value):
            return "\n\n".join(stringify(item) for item in value)
        return "".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return " ".join(stringify(item) for item in value.values())

    if isinstance(value, (Str, Code)):
        return value.text
    if isinstance(value, (Space, SoftBreak)):
        return " "
    if isinstance(value, (Emph, Strong, Link, Span, Para, Plain)):
        return stringify(value.content)
    if isinstance(value, (Note, RawInline, RawBlock)):
        return ""
    if isinstance(value, BulletList):
        return "\n".join(stringify(item) for item in value.items)
    if isinstance(value, DefinitionList):
        lines = []
        for term, definitions in value.items:
            lines.append(stringify(term))
            lines.extend(stringify(blocks) for blocks in definitions)
        return "\n".join(lines)

    return str(value)


def clone(nodes: List[Any]) -> List[Any]:
    """Deep copy a node list so callers can append without touching the original"""
    return [copy.deepcopy(node) for node in nodes]


class HTMLWriter:
    """
    Serialize nodes to HTML

    Footnotes from Note nodes are numbered in the order they are written and
    emitted by footnotes() once the document body is done.
    """

    def __init__(self):
        self.notes: List[str] = []

    def write(self, nodes: List[Any]) -> str:
        if nodes and all(isinstance(node, BLOCK_TYPES) for node in nodes):
            return "\n".join(self.block(node) for node in nodes)
        return "".join(self.inline(node) for node in nodes)

    def inlines(self, nodes: List[Inline]) -> str:
        return "".join(self.inline(node) for node in nodes)

    def inline(self, node: Inline) -> str:
        if isinstance(node, Str):
            return html_escape(node.text, quote=False)
        if isinstance(node, Space):
            return " "
        if isinstance(node, SoftBreak):
            return "\n"
        if isinstance(node, Emph):
            return f"<em>{self.inlines(node.content)}</em>"
        if isinstance(node, Strong):
            return f"<strong>{self.inlines(node.content)}</strong>"
        if isinstance(node, Code):
            return f"<code>{html_escape(node.text)}</code>"
        if isinstance(node, Link):
            title = f' title="{html_escape(node.title)}"' if node.title else ""
            return f'<a href="{html_escape(node.url)}"{title}>{self.inlines(node.content)}</a>'
        if isinstance(node, Span):
            cls = f' class="{" ".join(node.classes)}"' if node.classes else ""
            return f"<span{cls}>{self.inlines(node.content)}</span>"
        if isinstance(node, Note):
            self.notes.append("\n".join(self.block(b) for b in node.blocks))
            n = len(self.notes)
            return (f'<a href="#fn{n}" class="footnote-ref" id="fnref{n}" role="doc-noteref">'
                    f'<sup>{n}</sup></a>')
        if isinstance(node, RawInline):
            return node.text if node.format == "html" else ""
        raise TypeError(f"Not an inline node: {node!r}")

    def block(self, node: Block) -> str:
        if isinstance(node, Para):
            return f"<p>{self.inlines(node.content)}</p>"
        if isinstance(node, Plain):
            return self.inlines(node.content)
        if isinstance(node, BulletList):
            items = "".join(
                "<li>" + "\n".join(self.block(b) for b in item) + "</li>\n"
                for item in node.items
            )
            return f"<ul>\n{items}</ul>"
        if isinstance(node, RawBlock):
            return node.text if node.format == "html" else ""
        if isinstance(node, DefinitionList):
            parts = ["<dl>"]
            for term, definitions in node.items:
                parts.append(f"<dt>{self.inlines(term)}</dt>")
                for blocks in definitions:
                    parts.append("<dd>\n" + "\n".join(self.block(b) for b in blocks) + "\n</dd>")
            parts.append("</dl>")
            return "\n".join(parts)
        raise TypeError(f"Not a block node: {node!r}")

    def footnotes(self) -> str:
        if not self.notes:
            return ""
        items = "\n".join(
            f'<li id="fn{n}">{body}<a href="#fnref{n}" class="footnote-back" role="doc-backlink">↩︎</a></li>'
            for n, body in enumerate(self.notes, start=1)
        )
        return f'<section class="footnotes" role="doc-endnotes">\n<hr />\n<ol>\n{items}\n</ol>\n</section>'


class MarkdownWriter:
    """Serialize nodes back to Markdown, with footnotes as [^n] references"""

    def __init__(self, note_prefix: str = ""):
        self.note_prefix = note_prefix
        self.notes: List[str] = []

    def write(self, nodes: List[Any]) -> str:
        if nodes and all(isinstance(node, BLOCK_TYPES) for node in nodes):
            return "\n\n".join(self.block(node) for node in nodes)
        return "".join(self.inline(node) for node in nodes)

    def inlines(self, nodes: List[Inline]) -> str:
        return "".join(self.inline(node) for node in nodes)

    def inline(self, node: Inline) -> str:
        if isinstance(node, Str):
            return node.text
        if isinstance(node, Space):
            return " "
        if isinstance(node, SoftBreak):
            return "\n"
        if isinstance(node, Emph):
            return f"*{self.inlines(node.content)}*"
        if isinstance(node, Strong):
            return f"**{self.inlines(node.content)}**"
        if isinstance(node, Code):
            return f"`{node.text}`"
        if isinstance(node, Link):
            title = f' "{node.title}"' if node.title else ""
            return f"[{self.inlines(node.content)}]({node.url}{title})"
        if isinstance(node, Span):
            if node.classes:
                attrs = " ".join(f".{cls}" for cls in node.classes)
                return f"[{self.inlines(node.content)}]{{{attrs}}}"
            return self.inlines(node.content)
        if isinstance(node, Note):
            self.notes.append("\n\n".join(self.block(b) for b in node.blocks))
            return f"[^{self.note_prefix}{len(self.notes)}]"
        if isinstance(node, RawInline):
            return node.text if node.format in ("markdown", "html") else ""
        raise TypeError(f"Not an inline node: {node!r}")

    def block(self, node: Block) -> str:
        if isinstance(node, (Para, Plain)):
            return self.inlines(node.content)
        if isinstance(node, BulletList):
            return "\n".join(
                "- " + "\n  ".join(self.block(b) for b in item) for item in node.items
            )
        if isinstance(node, RawBlock):
            return node.text if node.format in ("markdown", "html") else ""
        if isinstance(node, DefinitionList):
            entries = []
            for term, definitions in node.items:
                body = "\n\n".join(
                    ":   " + "\n    ".join(self.block(b) for b in blocks) for blocks in definitions
                )
                entries.append(f"{self.inlines(term)}\n\n{body}")
            return "\n\n".join(entries)
        raise TypeError(f"Not a block node: {node!r}")

    def footnotes(self) -> str:
        return "\n".join(f"[^{self.note_prefix}{n}]: {body}" for n, body in enumerate(self.notes, start=1))


def to_html(nodes: List[Any], with_footnotes: bool = True) -> str:
    writer = HTMLWriter()
    body = writer.write(nodes)
    notes = writer.footnotes() if with_footnotes else ""
    return f"{body}\n{notes}" if notes else body


def to_markdown(nodes: List[Any], with_footnotes: bool = True) -> str:
    writer = MarkdownWriter()
    body = writer.write(nodes)
    notes = writer.footnotes() if with_footnotes else ""
    return f"{body}\n\n{notes}" if notes else body


def as_list(value: Optional[Any]) -> List[Any]:
    """Wrap a single node in a list; lists pass through"""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
