# ============================================
# file: src/flattener/model.py
# ============================================
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TagToken:
    text: str    # Literal markup including the angle brackets
    offset: int  # Index of the opening '<' in the source

    @property
    def is_comment(self) -> bool:
        return self.text.startswith("<!--")

    @property
    def is_closing(self) -> bool:
        return self.text.startswith("</")

    @property
    def is_self_closing(self) -> bool:
        return self.text.endswith("/>")

    @property
    def name(self) -> str:
        """
        The tag name without brackets or attributes.
        Only a single space separates the name from its attributes.
        """
        inner = self.text[2:-1] if self.is_closing else self.text[1:-1]
        return inner.split(" ")[0]

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


@dataclass(frozen=True)
class ResolvedElement:
    content: str
    depth: int
