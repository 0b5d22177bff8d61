# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Clause tree for SPKI certificate text.

A clause is ``(tag item item ...)`` where each item is either a nested clause
or an atom. Atoms are kept verbatim, delimiters included (``|b64|``,
``#hex#``, ``"quoted"``), so that reading and rendering a canonical clause
gives back the same bytes.

Rendering rules:
    - the tag is always followed by one space, even with no items: ``(subject )``
    - two consecutive atoms are separated by one space: ``(hash hit 2001:10::1)``
    - clauses are glued to their neighbours: ``(cert (issuer ...)(subject ...))``
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from .errors import MalformedStatement


MAX_DEPTH = 32

# Characters that end a bare atom
_DELIMITERS = set(' ()|#"')


@dataclass
class Clause:
    """One parenthesised clause with its ordered items."""

    tag: str
    items: list[Union[str, "Clause"]] = field(default_factory=list)

    @property
    def atoms(self) -> list[str]:
        return [item for item in self.items if isinstance(item, str)]

    @property
    def children(self) -> list["Clause"]:
        return [item for item in self.items if isinstance(item, Clause)]

    def walk(self) -> Iterator["Clause"]:
        """Yield this clause and all nested clauses in text order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, tag: str) -> Optional["Clause"]:
        """Return the first clause (in text order) whose tag is ``tag``."""
        for clause in self.walk():
            if clause.tag == tag:
                return clause
        return None

    def inject(self, anchor: str, item: Union[str, "Clause"]) -> bool:
        """
        Insert ``item`` right after the tag of the first ``anchor`` clause.

        Returns:
            False if no clause carries the anchor tag
        """
        target = self.find(anchor)
        if target is None:
            return False
        target.items.insert(0, item)
        return True

    def render(self) -> str:
        parts = ["(", self.tag, " "]
        previous_was_atom = False
        for item in self.items:
            if isinstance(item, Clause):
                parts.append(item.render())
                previous_was_atom = False
            else:
                if previous_was_atom:
                    parts.append(" ")
                parts.append(item)
                previous_was_atom = True
        parts.append(")")
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()


def quoted(value: str) -> str:
    """Wrap a value in double quotes as a string atom."""
    return f'"{value}"'


def unquote(atom: str) -> str:
    """Strip the delimiters from a quoted, pipe or hash atom."""
    if len(atom) >= 2 and atom[0] == atom[-1] and atom[0] in '"|#':
        return atom[1:-1]
    return atom


class _Reader:
    """Recursive-descent reader over a single clause."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _peek(self) -> str:
        if self.pos >= len(self.text):
            raise MalformedStatement(f"Unexpected end of input at offset {self.pos}")
        return self.text[self.pos]

    def _skip_spaces(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _until(self, closing: str) -> str:
        end = self.text.find(closing, self.pos + 1)
        if end == -1:
            raise MalformedStatement(
                f"Unterminated {closing!r} atom at offset {self.pos}"
            )
        atom = self.text[self.pos:end + 1]
        self.pos = end + 1
        return atom

    def _bare(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in _DELIMITERS:
            self.pos += 1
        if self.pos == start:
            raise MalformedStatement(
                f"Unexpected {self.text[start]!r} at offset {start}"
            )
        return self.text[start:self.pos]

    def clause(self, depth: int = 0) -> Clause:
        if depth > MAX_DEPTH:
            raise MalformedStatement("Clause nesting too deep")
        if self._peek() != "(":
            raise MalformedStatement(f"Expected '(' at offset {self.pos}")
        self.pos += 1

        tag = self._bare()
        node = Clause(tag)

        while True:
            self._skip_spaces()
            char = self._peek()
            if char == ")":
                self.pos += 1
                return node
            if char == "(":
                node.items.append(self.clause(depth + 1))
            elif char in '"|#':
                node.items.append(self._until(char))
            else:
                node.items.append(self._bare())


def parse(text: str) -> Clause:
    """
    Read one clause spanning the whole of ``text``.

    Raises:
        MalformedStatement: If delimiters are unbalanced, an atom is not
            terminated, or text follows the closing parenthesis
    """
    reader = _Reader(text.strip())
    node = reader.clause()
    if reader.pos != len(reader.text):
        raise MalformedStatement(
            f"Trailing text after clause at offset {reader.pos}"
        )
    return node


def is_well_formed(text: str) -> bool:
    """Return True if ``text`` reads as exactly one balanced clause."""
    try:
        parse(text)
    except MalformedStatement:
        return False
    return True
