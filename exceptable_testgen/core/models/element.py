"""
Program element model — the declarations a round is made of.

A round is the batch of declarations handed to the generator in one
invocation. Each element knows its simple name, its kind, the element
that lexically encloses it and the markers attached to it.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Qualified type of the triggering marker
TEST_SOURCE_MARKER = "red.enspi.exceptable.annotation.TestSource"


class ElementKind(str, Enum):
    """What kind of declaration an element is."""

    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    ANNOTATION = "annotation"


class ProgramElement(BaseModel):
    """A named declaration with its lexical enclosure.

    Packages carry their fully qualified name (``com.x``); every other
    kind carries its simple name (``FooTestSource``).

    Markers map a marker type, as written or as qualified by a
    single-type import (``TestSource``, ``red.enspi.exceptable.annotation.TestSource``),
    to the marker's attribute values.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ElementKind = ElementKind.CLASS
    enclosing: ProgramElement | None = None
    markers: dict[str, dict[str, str | None]] = Field(default_factory=dict)

    # ── Provenance (set by source discovery) ────────────────────
    source_file: str | None = None
    line: int | None = None

    @property
    def is_package(self) -> bool:
        return self.kind is ElementKind.PACKAGE

    @property
    def qualified_name(self) -> str:
        """Dotted name built from the enclosing chain."""
        if self.is_package:
            return self.name
        if self.enclosing is None or not self.enclosing.qualified_name:
            return self.name
        return f"{self.enclosing.qualified_name}.{self.name}"

    def enclosing_chain(self) -> Iterator[ProgramElement]:
        """Yield the lexically enclosing elements, innermost first."""
        current = self.enclosing
        while current is not None:
            yield current
            current = current.enclosing

    def find_marker(self, marker_type: str) -> dict[str, str | None] | None:
        """Return the attributes of *marker_type*, or None if not attached.

        Markers are matched by the type they were written (or imported)
        as. The one exception is a bare ``@TestSource`` that no import
        qualifies: it is taken to be the Exceptable marker.
        """
        if marker_type in self.markers:
            return self.markers[marker_type]
        if marker_type == TEST_SOURCE_MARKER:
            return self.markers.get(TEST_SOURCE_MARKER.rsplit(".", 1)[-1])
        return None

    def has_marker(self, marker_type: str) -> bool:
        return self.find_marker(marker_type) is not None


class Round(BaseModel):
    """One batch of elements processed by a single generator invocation."""

    elements: list[ProgramElement] = Field(default_factory=list)

    def elements_annotated_with(self, marker_type: str) -> list[ProgramElement]:
        """Elements carrying *marker_type*, in round order."""
        return [e for e in self.elements if e.has_marker(marker_type)]

    def __len__(self) -> int:
        return len(self.elements)


ProgramElement.model_rebuild()
