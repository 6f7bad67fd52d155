"""
Glossterm Markup Parser
Turns glossary display text and definitions into inline and block nodes
"""

import re
from typing import List, Optional

from .nodes import (
    Block, BulletList, Code, Emph, Inline, Link, Para, Plain, SoftBreak, Space,
    Str, Strong,
)

BULLET_RE = re.compile(r"^\s{0,3}[-*+]\s+(.*)$")
WHITESPACE_RE = re.compile(r"\s+")


def parse_inlines(text: Optional[str]) -> List[Inline]:
    """
    Parse text as Markdown and return the inlines of its first paragraph

    Args:
        text: Markdown source, usually a display term

    Returns:
        Inline nodes; a single Str of the raw text when no paragraph is found
    """
    if text is None or text == "":
        return []
    blocks = parse_blocks(text)
    if blocks:
        first = blocks[0]
        if isinstance(first, (Para, Plain)):
            return first.content
    return [Str(text)]


def parse_blocks(text: Optional[str]) -> List[Block]:
    """
    Parse Markdown into paragraphs and bullet lists

    Args:
        text: Markdown source, usually a definition

    Returns:
        Block nodes, empty for empty input
    """
    if text is None or text == "":
        return []

    blocks: List[Block] = []
    paragraph: List[str] = []
    items: List[str] = []

    def flush_paragraph():
        if paragraph:
            blocks.append(Para(_parse_inline("\n".join(paragraph))))
            paragraph.clear()

    def flush_list():
        if items:
            blocks.append(BulletList([[Plain(_parse_inline(item))] for item in items]))
            items.clear()

    for line in text.splitlines():
        if not line.strip():
            flush_paragraph()
            flush_list()
            continue

        bullet = BULLET_RE.match(line)
        if bullet and not paragraph:
            items.append(bullet.group(1).strip())
        elif items and line.startswith((" ", "\t")):
            # continuation of the previous list item
            items[-1] += " " + line.strip()
        else:
            flush_list()
            paragraph.append(line.strip())

    flush_paragraph()
    flush_list()
    return blocks


def _find_closing(text: str, start: int, closing: str) -> int:
    i = start
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text.startswith(closing, i):
            return i
        i += 1
    return -1


def _parse_inline(text: str) -> List[Inline]:
    result: List[Inline] = []
    buffer: List[str] = []

    def flush():
        if buffer:
            result.append(Str("".join(buffer)))
            buffer.clear()

    i = 0
    while i < len(text):
        char = text[i]

        if char.isspace():
            flush()
            match = WHITESPACE_RE.match(text, i)
            run = match.group(0)
            result.append(SoftBreak() if "\n" in run else Space())
            i = match.end()
            continue

        if char == "\\" and i + 1 < len(text) and not text[i + 1].isspace():
            buffer.append(text[i + 1])
            i += 2
            continue

        if char == "`":
            close = text.find("`", i + 1)
            if close != -1:
                flush()
                result.append(Code(text[i + 1:close]))
                i = close + 1
                continue

        # Strong: **text**
        if text.startswith("**", i):
            close = _find_closing(text, i + 2, "**")
            if close > i + 2:
                flush()
                result.append(Strong(_parse_inline(text[i + 2:close])))
                i = close + 2
                continue

        # Emph: *text* or _text_, underscores only at word edges
        if char in "*_":
            opens = char == "*" or i == 0 or not text[i - 1].isalnum()
            close = _find_closing(text, i + 1, char) if opens else -1
            if char == "_" and close != -1 and close + 1 < len(text) and text[close + 1].isalnum():
                close = -1
            if close > i + 1:
                flush()
                result.append(Emph(_parse_inline(text[i + 1:close])))
                i = close + 1
                continue

        # Link: [text](url "title")
        if char == "[":
            close = _find_closing(text, i + 1, "]")
            if close != -1 and text.startswith("(", close + 1):
                end = _find_closing(text, close + 2, ")")
                if end != -1:
                    flush()
                    target = text[close + 2:end].strip()
                    url, _, title = target.partition(" ")
                    result.append(Link(_parse_inline(text[i + 1:close]), url, title.strip().strip('"')))
                    i = end + 1
                    continue

        buffer.append(char)
        i += 1

    flush()
    return result
