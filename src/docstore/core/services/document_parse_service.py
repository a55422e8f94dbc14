# src/docstore/core/services/document_parse_service.py
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from flattener.errors import EmptyInputError
from flattener.parser import parse
from docstore.model import XMLDocument

logger = logging.getLogger(__name__)

# (element prefix, XMLDocument field); the first element with a prefix wins.
FIELD_PREFIXES: List[Tuple[str, str]] = [
    ("<title>", "title"),
    ("<description>", "description"),
    ("<author>", "author"),
    ("<creationDate>", "created_at"),
]


def _unwrap(element: str, prefix: str) -> str:
    """Strips '<name>' from the front and '</name>' from the back."""
    return element[len(prefix):len(element) - len(prefix) - 1]


def extract_fields(elements: List[str]) -> Dict[str, str]:
    """Maps each known field to the text of the first element carrying its tag."""
    fields: Dict[str, str] = {}
    for element in elements:
        for prefix, field in FIELD_PREFIXES:
            if field not in fields and element.startswith(prefix):
                fields[field] = _unwrap(element, prefix)
    return fields


def parse_document(data: str, strict: bool = False) -> XMLDocument:
    """
    Parses raw markup into an XMLDocument.

    Raises:
        EmptyInputError: `data` is empty or whitespace only.
        ParseError: The markup could not be flattened.
    """
    if not data or not data.strip():
        raise EmptyInputError()

    elements = parse(data, strict=strict)
    fields = extract_fields(elements)
    missing = [field for _, field in FIELD_PREFIXES if field not in fields]
    if missing:
        logger.debug("Document has no element for: %s", ", ".join(missing))

    return XMLDocument(xml_data=elements, **fields)
