from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class Span:
    """Inclusive, 1-based range of source lines eligible for rewriting."""

    start: int
    end: int

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end


class Locator(BaseModel):
    line: str = ""
    record: str = ""
    field: str = ""
    all: bool = False


class RewriteSpec(BaseModel):
    from_type: str
    to_type: str
