# src/flattener/resolver.py
from __future__ import annotations

import logging
from operator import attrgetter
from typing import List

from flattener.errors import NoOpeningTagError, UnclosedTagError, UnmatchedClosingTagError
from flattener.model import ResolvedElement, TagToken

logger = logging.getLogger(__name__)

# Removed literally from every element. Line breaks and tabs go first so that
# spaces they separated cannot form a new run after the pass.
_STRIPPED_SEQUENCES = ("\t", "\n", "\r", "    ")


def normalize_content(content: str) -> str:
    """Removes tabs, line breaks and 4-space runs from an element string."""
    for seq in _STRIPPED_SEQUENCES:
        content = content.replace(seq, "")
    return content


def resolve(tokens: List[TagToken], source: str, strict: bool = False) -> List[ResolvedElement]:
    """
    Matches closing tags to their openers and labels each element with its depth.

    Elements come out in closing order during the scan (children before
    parents); a stable sort on depth then puts parents first while siblings
    keep their source order.

    Args:
        tokens (List[TagToken]): Output of `tokenize` for the same source.
        source (str): The raw markup the offsets refer to.
        strict (bool): Raise when tags are still open after the last token.

    Returns:
        List[ResolvedElement]: Normalized elements sorted by ascending depth.
    """
    stack: List[TagToken] = []
    depth = 0
    elements: List[ResolvedElement] = []

    for token in tokens:
        if token.is_comment:
            continue

        if token.is_closing:
            if not stack:
                raise NoOpeningTagError(token.text)
            opener = stack.pop()
            if opener.name != token.name:
                raise UnmatchedClosingTagError(opener.text, token.text)
            elements.append(ResolvedElement(content=source[opener.offset:token.end], depth=depth))
            depth -= 1
        elif token.is_self_closing:
            elements.append(ResolvedElement(content=token.text, depth=depth))
        else:
            stack.append(token)
            depth += 1

    if stack:
        if strict:
            raise UnclosedTagError(stack[-1].text)
        logger.warning(
            "%d tag(s) left open at end of input, innermost %s; dropped from output.",
            len(stack), stack[-1].text
        )

    elements.sort(key=attrgetter("depth"))
    return [ResolvedElement(content=normalize_content(e.content), depth=e.depth) for e in elements]
