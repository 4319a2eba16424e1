"""Alias-based header resolution shared by the importer contracts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class HeaderSpec:
    """A logical CSV column and the header spellings accepted for it."""

    name: str
    description: str
    aliases: Tuple[str, ...]


@dataclass(frozen=True)
class HeaderMap:
    """Column positions resolved from a header row; -1 marks an absent column."""

    indices: Mapping[str, int]
    width: int

    def index(self, name: str) -> int:
        return self.indices.get(name, -1)

    def has(self, name: str) -> bool:
        return self.index(name) != -1

    def value(self, row: Sequence[str], name: str) -> str:
        idx = self.index(name)
        if idx < 0 or idx >= len(row):
            return ""
        return row[idx]


def normalize_header(header: str | None) -> str:
    """Lower-case and drop everything but ``[a-z0-9]`` ("GL Acct #" -> "glacct")."""

    return _NON_ALNUM.sub("", str(header or "").strip().lower())


def find_header_index(normalized_headers: Sequence[str], aliases: Sequence[str]) -> int:
    """Return the position of the first alias present in the headers, else -1."""

    for alias in aliases:
        token = normalize_header(alias)
        for idx, header in enumerate(normalized_headers):
            if header == token:
                return idx
    return -1


def resolve_header_map(header_row: Sequence[str], specs: Sequence[HeaderSpec]) -> HeaderMap:
    normalized = [normalize_header(header) for header in header_row]
    indices = {header.name: find_header_index(normalized, header.aliases) for header in specs}
    return HeaderMap(indices=indices, width=len(normalized))
