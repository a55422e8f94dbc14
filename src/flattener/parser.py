# src/flattener/parser.py
from __future__ import annotations

import logging
from typing import List

from flattener.resolver import resolve
from flattener.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse(source: str, strict: bool = False) -> List[str]:
    """
    Flattens a markup document into its element strings, outermost first.

    Empty input yields an empty list; rejecting it is left to the caller.

    Raises:
        ParseError: One of the subclasses in `flattener.errors`.
    """
    tokens = tokenize(source, strict=strict)
    elements = resolve(tokens, source, strict=strict)
    logger.debug("Flattened %d tags into %d elements", len(tokens), len(elements))
    return [element.content for element in elements]
