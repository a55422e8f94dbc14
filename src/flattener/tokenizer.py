# src/flattener/tokenizer.py
from __future__ import annotations

import logging
from typing import List, Optional

from flattener.errors import TagPairingError, UnclosedTagError
from flattener.model import TagToken

logger = logging.getLogger(__name__)


def tokenize(source: str, strict: bool = False) -> List[TagToken]:
    """
    Scans the source once and collects every `<...>` construct as a TagToken.

    Text between tags is skipped; it stays reachable through the offsets.

    Args:
        source (str): The raw markup.
        strict (bool): Raise on an unterminated trailing tag instead of dropping it.

    Returns:
        List[TagToken]: Tokens in source order.

    Raises:
        TagPairingError: A '<' appeared inside a tag that was not yet closed.
        UnclosedTagError: Strict mode only, the source ends inside a tag.
    """
    tokens: List[TagToken] = []
    start: Optional[int] = None

    for i, char in enumerate(source):
        if char == "<":
            if start is not None:
                logger.debug("Second '<' at offset %d inside tag opened at %d", i, start)
                raise TagPairingError(offset=i)
            start = i
        elif char == ">" and start is not None:
            tokens.append(TagToken(text=source[start:i + 1], offset=start))
            start = None

    if start is not None:
        if strict:
            raise UnclosedTagError(source[start:])
        logger.debug("Dropping unterminated tag at offset %d", start)

    return tokens
