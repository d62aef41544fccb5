"""
Marker declaration model — one @TestSource occurrence to generate from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from exceptable_testgen.core.models.element import TEST_SOURCE_MARKER, ProgramElement

# Namespace used when neither the marker nor the enclosure names a package
DEFAULT_PACKAGE = "red.enspi.exceptable"


class MarkerDeclaration(BaseModel):
    """A scanned marker and the element it is attached to.

    Attributes:
        element:          The annotated type declaration.
        marker_type:      Marker type the scanner matched.
        package_name:     Explicit package override, None when absent.
        exceptable_class: Simple name of the exception type under test.
    """

    model_config = ConfigDict(frozen=True)

    element: ProgramElement
    marker_type: str = TEST_SOURCE_MARKER
    package_name: str | None = None
    exceptable_class: str = ""

    @property
    def test_source(self) -> str:
        """Simple name of the annotated test-source class."""
        return self.element.name
