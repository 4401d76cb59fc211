# SolCallFlow/Utils/SourceSlicer.py
from __future__ import annotations

import re

from Domain.AST import SourceLocation

FALLBACK = "<fallback>"
RECEIVE = "<receive>"
CONSTRUCTOR = "constructor"

# unnamed members are found by literal header text, never by keyword + name
_SENTINEL_HEADERS = {
    FALLBACK:    re.compile(r"function\s?\(\)|\bfallback\s*\("),
    RECEIVE:     re.compile(r"\breceive\s*\("),
    CONSTRUCTOR: re.compile(r"\bconstructor\s*\("),
}


class SourceSlicer:
    """
    Verbatim source text of a named function or modifier.

    Two tiers:
      1. a declaration location registered by the symbol collector
         → the full lines the declaration spans
      2. a line scan for `function <name>` / `modifier <name>`,
         extended by brace counting until depth returns to zero
    Results are cached per (name, is_modifier).
    """

    def __init__(self, source: str):
        self.source = source
        self.lines = source.split("\n")
        self._locations: dict[tuple[str, bool], SourceLocation] = {}
        self._cache: dict[tuple[str, bool], str | None] = {}

    def register(self, name: str, loc: SourceLocation | None, is_modifier=False):
        # first declaration wins, the same one the line scan would find
        if loc is None or name in _SENTINEL_HEADERS:
            return
        self._locations.setdefault((name, is_modifier), loc)

    def source_of(self, name: str | None, is_modifier=False) -> str | None:
        if not name:
            return None
        key = (name, is_modifier)
        if key not in self._cache:
            self._cache[key] = self._slice(name, is_modifier)
        return self._cache[key]

    # ─────────────────────────────────────────── tiers
    def _slice(self, name: str, is_modifier: bool) -> str | None:
        loc = self._locations.get((name, is_modifier))
        if loc is not None and 1 <= loc.start_line <= loc.end_line <= len(self.lines):
            return "\n".join(self.lines[loc.start_line - 1:loc.end_line]).strip()

        header = _SENTINEL_HEADERS.get(name)
        if header is None:
            keyword = "modifier" if is_modifier else "function"
            header = re.compile(rf"\b{keyword}\s+{re.escape(name)}\b")

        for idx, line in enumerate(self.lines):
            if header.search(line):
                return self._extend_to_closing_brace(idx)
        return None

    def _extend_to_closing_brace(self, start: int) -> str:
        depth = 0
        started = False
        end = len(self.lines) - 1
        for idx in range(start, len(self.lines)):
            for ch in self.lines[idx]:
                if ch == "{":
                    depth += 1
                    started = True
                elif ch == "}":
                    depth -= 1
            if started and depth == 0:
                end = idx
                break
        return "\n".join(self.lines[start:end + 1]).strip()
