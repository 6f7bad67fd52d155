"""
Glossterm Definitions Source
Reads the YAML glossary file that maps terms to their definitions
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .exceptions import DefinitionsFileError
from .markup import parse_blocks
from .nodes import stringify

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

STR_TAG = "tag:yaml.org,2002:str"
MERGE_TAG = "tag:yaml.org,2002:merge"


class DefinitionsLoader(yaml.SafeLoader):
    """
    SafeLoader that keeps scalar mapping keys as the text the author wrote

    Terms such as On, No, NULL or 404 stay strings instead of turning into
    booleans, None or numbers. Values are resolved as usual.
    """

    def construct_mapping(self, node, deep=False):
        for key_node, _ in node.value:
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag != MERGE_TAG:
                key_node.tag = STR_TAG
        return super().construct_mapping(node, deep=deep)


def split_front_matter(text: str, loader=yaml.SafeLoader) -> Tuple[Dict[str, Any], str]:
    """
    Split a leading YAML front matter block from a document

    Args:
        text: Document source
        loader: PyYAML loader class for the block

    Returns:
        Tuple of (metadata, body). Metadata is empty when there is no block or
        when the block is not a valid YAML mapping.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return {}, text

    end_index = None
    for idx in range(1, len(lines)):
        if lines[idx].strip() in (FRONT_MATTER_DELIMITER, "..."):
            end_index = idx
            break

    if end_index is None:
        return {}, text

    raw = "".join(lines[1:end_index])
    body = "".join(lines[end_index + 1:])

    try:
        metadata = yaml.load(raw, Loader=loader)
    except yaml.YAMLError as e:
        logger.warning(f"Could not parse front matter: {e}")
        return {}, body

    if metadata is None:
        return {}, body
    if not isinstance(metadata, dict):
        logger.warning(f"Front matter is a {type(metadata).__name__}, expected a mapping")
        return {}, body

    return metadata, body


def read_definitions(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load the definitions file at path

    The file content is wrapped as a front matter block and parsed. Every key
    is stored as authored and again in lower case, so lookups by the
    lower-cased term succeed whatever casing the author used.

    Args:
        path: Location of the definitions file

    Returns:
        Mapping of term to raw definition value

    Raises:
        DefinitionsFileError: If the file cannot be opened or decoded
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot open file {path}: {e}")
        raise DefinitionsFileError(str(path), str(e)) from e

    wrapped = f"{FRONT_MATTER_DELIMITER}\n{content}\n{FRONT_MATTER_DELIMITER}\n"
    glossary, _ = split_front_matter(wrapped, loader=DefinitionsLoader)

    definitions: Dict[str, Any] = {}
    for key, value in glossary.items():
        key = stringify(key)
        definitions[key] = value
    for key in list(definitions):
        definitions[key.lower()] = definitions[key]

    logger.debug(f"Read {len(glossary)} definitions from {path}")
    return definitions


def lookup_definition(path: Union[str, Path], term: str) -> Optional[str]:
    """
    Look up one term in a freshly read definitions file

    Args:
        path: Location of the definitions file
        term: Lower-cased lookup key

    Returns:
        The definition as plain text, or None if the term is not defined.
        String values are read as Markdown, so their formatting is dropped.
    """
    definitions = read_definitions(path)
    if term not in definitions:
        logger.debug(f"No definition for '{term}' in {path}")
        return None
    value = definitions[term]
    if isinstance(value, str):
        return stringify(parse_blocks(value))
    return stringify(value)
