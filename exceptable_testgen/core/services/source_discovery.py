"""
Source discovery — build a round from Java sources on disk.

Finds type declarations and the annotations attached to them without
parsing method bodies: a token stream is enough to know the package
of a compilation unit, which types nest inside which, and which
``@TestSource(...)`` markers precede a type.

Pure logic apart from reading files.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from exceptable_testgen.core.models.element import ElementKind, ProgramElement, Round

logger = logging.getLogger(__name__)

SOURCE_GLOB = "*.java"


class DiscoveryError(Exception):
    """Raised when a source root or file cannot be read."""


# ── Tokenizer ───────────────────────────────────────────────────

_TOKEN_RE = re.compile(
    r"""
      (?P<comment>//[^\n]*|/\*.*?\*/)
    | (?P<textblock>\"\"\".*?\"\"\")
    | (?P<string>"(?:\\.|[^"\\\n])*")
    | (?P<char>'(?:\\.|[^'\\\n])*')
    | (?P<ident>[A-Za-z_$][A-Za-z0-9_$]*)
    | (?P<number>\d[\w.]*)
    | (?P<space>\s+)
    | (?P<symbol>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_SKIPPED = {"comment", "space"}

_TYPE_KEYWORDS = {
    "class": ElementKind.CLASS,
    "interface": ElementKind.INTERFACE,
    "enum": ElementKind.ENUM,
    "record": ElementKind.RECORD,
}


@dataclass
class _Token:
    kind: str
    text: str
    line: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    line = 1
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup or "symbol"
        value = match.group()
        if kind not in _SKIPPED:
            tokens.append(_Token(kind, value, line))
        line += value.count("\n")
    return tokens


def _string_value(literal: str) -> str:
    """Strip the quotes of a string literal and undo simple escapes."""
    body = literal[1:-1]
    return body.replace('\\"', '"').replace("\\\\", "\\")


# ── Parser ──────────────────────────────────────────────────────


class _UnitParser:
    """Walks the tokens of one compilation unit."""

    def __init__(self, tokens: list[_Token], source_file: str | None) -> None:
        self.tokens = tokens
        self.pos = 0
        self.source_file = source_file

        self.package: ProgramElement | None = None
        self.elements: list[ProgramElement] = []

        self._depth = 0
        self._open_types: list[tuple[ProgramElement, int]] = []
        self._pending_markers: dict[str, dict[str, str | None]] = {}
        self._pending_type: ProgramElement | None = None
        self._imports: dict[str, str] = {}  # simple name → qualified, single-type imports

    # ── Token helpers ───────────────────────────────────────────

    def _peek(self, offset: int = 0) -> _Token | None:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def _next(self) -> _Token | None:
        token = self._peek()
        if token is not None:
            self.pos += 1
        return token

    def _at_symbol(self, symbol: str, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.kind == "symbol" and token.text == symbol

    def _qualified_name(self) -> str:
        """Consume ``ident(.ident)*`` and return it."""
        parts: list[str] = []
        token = self._peek()
        while token is not None and token.kind == "ident":
            parts.append(token.text)
            self.pos += 1
            if self._at_symbol(".") and (nxt := self._peek(1)) is not None and nxt.kind == "ident":
                self.pos += 1
                token = self._peek()
            else:
                break
        return ".".join(parts)

    # ── Constructs ──────────────────────────────────────────────

    def parse(self) -> list[ProgramElement]:
        while (token := self._peek()) is not None:
            if token.kind == "ident" and token.text == "package" and self._depth == 0:
                self.pos += 1
                name = self._qualified_name()
                if name:
                    self.package = ProgramElement(
                        name=name,
                        kind=ElementKind.PACKAGE,
                        source_file=self.source_file,
                        line=token.line,
                    )
            elif token.kind == "ident" and token.text == "import" and self._depth == 0:
                self.pos += 1
                self._import()
            elif token.kind == "symbol" and token.text == "@":
                self._annotation()
            elif token.kind == "ident" and token.text in _TYPE_KEYWORDS and not self._after_dot():
                self.pos += 1
                self._type_declaration(_TYPE_KEYWORDS[token.text])
            elif token.kind == "symbol" and token.text == "{":
                self.pos += 1
                self._open_brace()
            elif token.kind == "symbol" and token.text == "}":
                self.pos += 1
                self._close_brace()
            elif token.kind == "symbol" and token.text == ";":
                self.pos += 1
                self._pending_markers = {}
            else:
                self.pos += 1
        return self.elements

    def _after_dot(self) -> bool:
        """``Foo.class`` is a literal, not a declaration."""
        return self.pos > 0 and self.tokens[self.pos - 1].text == "."

    def _import(self) -> None:
        """Record ``import a.b.C;``. Static and on-demand imports are skipped."""
        if (token := self._peek()) is not None and token.text == "static":
            return
        name = self._qualified_name()
        if name and not self._at_symbol("."):
            self._imports[name.rsplit(".", 1)[-1]] = name

    def _annotation(self) -> None:
        self.pos += 1  # '@'
        token = self._peek()
        if token is not None and token.kind == "ident" and token.text == "interface":
            self.pos += 1
            self._type_declaration(ElementKind.ANNOTATION)
            return

        name = self._qualified_name()
        name = self._imports.get(name, name)
        attributes: dict[str, str | None] = {}
        if self._at_symbol("("):
            attributes = self._annotation_arguments()
        if name:
            self._pending_markers[name] = attributes

    def _annotation_arguments(self) -> dict[str, str | None]:
        """Parse ``(name = "value", ...)`` or ``("value")``; skip other values."""
        attributes: dict[str, str | None] = {}
        self.pos += 1  # '('
        depth = 1
        while depth and (token := self._next()) is not None:
            if token.kind == "symbol" and token.text in "({[":
                depth += 1
            elif token.kind == "symbol" and token.text in ")}]":
                depth -= 1
            elif depth == 1 and token.kind == "ident" and self._at_symbol("="):
                value = self._peek(1)
                if value is not None and value.kind == "string":
                    attributes[token.text] = _string_value(value.text)
                    self.pos += 2
            elif depth == 1 and token.kind == "string" and not attributes:
                attributes["value"] = _string_value(token.text)
        return attributes

    def _type_declaration(self, kind: ElementKind) -> None:
        name_token = self._peek()
        if name_token is None or name_token.kind != "ident":
            return
        self.pos += 1

        enclosing = self._open_types[-1][0] if self._open_types else self.package
        self._pending_type = ProgramElement(
            name=name_token.text,
            kind=kind,
            enclosing=enclosing,
            markers=self._pending_markers,
            source_file=self.source_file,
            line=name_token.line,
        )
        self._pending_markers = {}

    def _open_brace(self) -> None:
        self._depth += 1
        self._pending_markers = {}
        if self._pending_type is not None:
            self._open_types.append((self._pending_type, self._depth))
            self.elements.append(self._pending_type)
            self._pending_type = None

    def _close_brace(self) -> None:
        if self._open_types and self._open_types[-1][1] == self._depth:
            self._open_types.pop()
        self._depth = max(0, self._depth - 1)
        self._pending_markers = {}


# ── Public API ──────────────────────────────────────────────────


def parse_source(text: str, source_file: str | None = None) -> list[ProgramElement]:
    """Return the type declarations of one Java compilation unit.

    Args:
        text: Source text.
        source_file: Path recorded on each element for diagnostics.
    """
    return _UnitParser(_tokenize(text), source_file).parse()


def discover_file(path: Path) -> list[ProgramElement]:
    """Read and parse a single source file.

    Raises:
        DiscoveryError: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DiscoveryError(f"Cannot read {path}: {e}") from e
    return parse_source(text, source_file=str(path))


def discover_round(source_roots: list[Path]) -> Round:
    """Walk *source_roots* and collect every type declaration found.

    Missing roots are skipped with a warning; files are visited in
    sorted order so the round order is stable between runs.
    """
    elements: list[ProgramElement] = []
    for root in source_roots:
        if root.is_file():
            files = [root]
        elif root.is_dir():
            files = sorted(root.rglob(SOURCE_GLOB))
        else:
            logger.warning("Source root not found: %s", root)
            continue

        for path in files:
            found = discover_file(path)
            logger.debug("Discovered %d type(s) in %s", len(found), path)
            elements.extend(found)

    logger.info(
        "Discovered %d type(s) in %d source root(s)",
        len(elements), len(source_roots),
    )
    return Round(elements=elements)
