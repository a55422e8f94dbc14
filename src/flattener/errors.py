# src/flattener/errors.py
from typing import Optional


class ParseError(ValueError):
    """Base class for every failure raised while flattening a document."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(ParseError):
    def __init__(self):
        super().__init__("no data for parsing")


class TagPairingError(ParseError):
    """A '<' was found before the previous tag was closed with '>'."""

    def __init__(self, offset: Optional[int] = None):
        super().__init__("tag pairing error")
        self.offset = offset


class NoOpeningTagError(ParseError):
    def __init__(self, closer: str):
        super().__init__("no opening tag error: no opening tag")
        self.closer = closer


class UnmatchedClosingTagError(ParseError):
    def __init__(self, opener: str, closer: str):
        super().__init__(f"unmatched closing tag error: {opener} {closer}")
        self.opener = opener
        self.closer = closer


class UnclosedTagError(ParseError):
    """Raised in strict mode when the input ends with tags still open."""

    def __init__(self, opener: str):
        super().__init__(f"unclosed tag error: {opener}")
        self.opener = opener
