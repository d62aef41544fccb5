"""
Generator configuration model — the contents of testgen.yml.

Explicit declarations are generation requests written by hand; they
produce the same program elements source discovery would.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from exceptable_testgen.core.models.declaration import DEFAULT_PACKAGE, TEST_SOURCE_MARKER
from exceptable_testgen.core.models.element import ElementKind, ProgramElement

DEFAULT_OUTPUT_DIR = "build/generated/sources/testgen"


class EnclosingRef(BaseModel):
    """One link of a declared lexical enclosure."""

    kind: ElementKind = ElementKind.CLASS
    name: str


class DeclarationRef(BaseModel):
    """A @TestSource declaration given directly in configuration.

    ``enclosing`` is either a package name, or a list of enclosing
    elements written outermost first::

        enclosing:
          - {kind: package, name: com.x}
          - {kind: class, name: Outer}
    """

    name: str
    exceptable_class: str = Field(
        default="",
        validation_alias=AliasChoices("exceptable_class", "exceptableClass"),
    )
    package_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("package_name", "packageName"),
    )
    enclosing: str | list[EnclosingRef] | None = None
    marker_type: str = TEST_SOURCE_MARKER

    def to_element(self) -> ProgramElement:
        """Build the annotated program element this declaration describes."""
        parent: ProgramElement | None = None
        if isinstance(self.enclosing, str):
            parent = ProgramElement(name=self.enclosing, kind=ElementKind.PACKAGE)
        elif self.enclosing:
            for ref in self.enclosing:
                parent = ProgramElement(name=ref.name, kind=ref.kind, enclosing=parent)

        attributes: dict[str, str | None] = {"exceptableClass": self.exceptable_class}
        if self.package_name is not None:
            attributes["packageName"] = self.package_name

        return ProgramElement(
            name=self.name,
            kind=ElementKind.CLASS,
            enclosing=parent,
            markers={self.marker_type: attributes},
        )


class GeneratorConfig(BaseModel):
    """Root configuration — loaded from testgen.yml."""

    version: int = 1

    output_dir: str = DEFAULT_OUTPUT_DIR
    default_package: str = DEFAULT_PACKAGE
    marker_types: list[str] = Field(default_factory=lambda: [TEST_SOURCE_MARKER])
    source_roots: list[str] = Field(default_factory=list)
    declarations: list[DeclarationRef] = Field(default_factory=list)
