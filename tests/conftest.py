"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from exceptable_testgen.core.models import ElementKind, ProgramElement, TEST_SOURCE_MARKER


@pytest.fixture
def package_element() -> ProgramElement:
    """Package ``y.z`` for lexical-enclosure tests."""
    return ProgramElement(name="y.z", kind=ElementKind.PACKAGE)


@pytest.fixture
def make_element() -> Callable[..., ProgramElement]:
    """Factory for a class carrying a @TestSource marker."""

    def _make(
        name: str = "FooTestSource",
        exceptable_class: str | None = "Foo",
        package_name: str | None = None,
        enclosing: ProgramElement | None = None,
        marker_type: str = TEST_SOURCE_MARKER,
    ) -> ProgramElement:
        attributes: dict[str, str | None] = {}
        if exceptable_class is not None:
            attributes["exceptableClass"] = exceptable_class
        if package_name is not None:
            attributes["packageName"] = package_name
        return ProgramElement(
            name=name,
            enclosing=enclosing,
            markers={marker_type: attributes},
        )

    return _make


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write a testgen.yml into tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "testgen.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def java_sources(tmp_path: Path) -> Path:
    """A small Java source tree with two @TestSource classes."""
    root = tmp_path / "src" / "test" / "java"
    pkg = root / "com" / "acme" / "errors"
    pkg.mkdir(parents=True)
    (pkg / "ParseErrorTestSource.java").write_text(textwrap.dedent("""\
        package com.acme.errors;

        import red.enspi.exceptable.annotation.TestSource;

        @TestSource(exceptableClass = "ParseError")
        public class ParseErrorTestSource {
        }
    """))
    (pkg / "IoErrorTestSource.java").write_text(textwrap.dedent("""\
        package com.acme.errors;

        @red.enspi.exceptable.annotation.TestSource(
            packageName = "com.acme.io",
            exceptableClass = "IoError")
        public interface IoErrorTestSource {
        }
    """))
    return root
