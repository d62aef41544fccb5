"""
Generator — turn scanned @TestSource declarations into test suites.

Per declaration the pipeline is:

    scanned → resolved → substituted → rendered → emitted
                                                 ↘ failed

Only emission can fail at runtime. The first emission failure ends
the round: the round reports failure and later declarations are not
processed. Artifacts emitted before the failure stay where they are.

A declaration with malformed marker attributes is rejected before
resolution; that declaration fails, the round goes on, and the round
still reports failure at the end.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from exceptable_testgen.core.models.declaration import (
    DEFAULT_PACKAGE,
    TEST_SOURCE_MARKER,
    MarkerDeclaration,
)
from exceptable_testgen.core.models.element import ElementKind, Round
from exceptable_testgen.core.services.filer import Filer, FilerError
from exceptable_testgen.core.services.generators.exceptable_test import (
    artifact_name,
    build_substitutions,
    render,
)
from exceptable_testgen.core.services.messager import Messager
from exceptable_testgen.core.services.scanner import scan

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_PACKAGE_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*(?:\.[A-Za-z_$][A-Za-z0-9_$]*)*")


class GenerationState(str, Enum):
    SCANNED = "scanned"
    RESOLVED = "resolved"
    SUBSTITUTED = "substituted"
    RENDERED = "rendered"
    EMITTED = "emitted"
    INVALID = "invalid"   # rejected marker attributes; round continues
    FAILED = "failed"     # emission failure; round stops


@dataclass
class GenerationOutcome:
    """What happened to one declaration."""

    declaration: MarkerDeclaration
    state: GenerationState = GenerationState.SCANNED
    package: str | None = None
    artifact: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is GenerationState.EMITTED

    def to_dict(self) -> dict:
        return {
            "element": self.declaration.element.qualified_name,
            "exceptable_class": self.declaration.exceptable_class,
            "state": self.state.value,
            "package": self.package,
            "artifact": self.artifact,
            "error": self.error,
        }


@dataclass
class RoundResult:
    """Outcome of processing one round."""

    ok: bool = True
    outcomes: list[GenerationOutcome] = field(default_factory=list)
    skipped: int = 0   # declarations not reached after an emission failure

    @property
    def generated(self) -> list[str]:
        return [o.artifact for o in self.outcomes if o.ok and o.artifact]


# ── Steps ───────────────────────────────────────────────────────


def validate_declaration(declaration: MarkerDeclaration) -> str | None:
    """Return a description of the first malformed attribute, or None."""
    if not declaration.exceptable_class:
        return "exceptableClass is required"
    if not _IDENTIFIER_RE.fullmatch(declaration.exceptable_class):
        return f"exceptableClass {declaration.exceptable_class!r} is not a valid class name"
    if declaration.package_name and not _PACKAGE_RE.fullmatch(declaration.package_name):
        return f"packageName {declaration.package_name!r} is not a valid package name"
    if not _IDENTIFIER_RE.fullmatch(declaration.test_source):
        return f"test source {declaration.test_source!r} is not a valid class name"
    return None


def validate_package(package: str) -> str | None:
    """Check a resolved package (enclosing element or default) before it is rendered."""
    if not _PACKAGE_RE.fullmatch(package):
        return f"package {package!r} is not a valid package name"
    return None


def resolve_package(
    declaration: MarkerDeclaration,
    default_package: str = DEFAULT_PACKAGE,
) -> str:
    """Resolve the package the generated suite belongs to.

    Priority:
        1. the marker's explicit ``packageName``
        2. the nearest enclosing package element
        3. *default_package*
    """
    if declaration.package_name:
        return declaration.package_name

    for enclosing in declaration.element.enclosing_chain():
        if enclosing.kind is ElementKind.PACKAGE:
            return enclosing.name

    logger.warning(
        "No enclosing package for %s; using default package %s",
        declaration.element.name, default_package,
    )
    return default_package


# ── Processor ───────────────────────────────────────────────────


class Generator:
    """Processes rounds of @TestSource declarations.

    Args:
        filer: Output sink for generated artifacts.
        messager: Diagnostic sink; a fresh one is created if omitted.
        marker_types: Marker types that trigger generation.
        default_package: Package used when resolution finds none.
    """

    def __init__(
        self,
        filer: Filer,
        messager: Messager | None = None,
        *,
        marker_types: Iterable[str] = (TEST_SOURCE_MARKER,),
        default_package: str = DEFAULT_PACKAGE,
    ) -> None:
        self.filer = filer
        self.messager = messager or Messager()
        self.marker_types = tuple(marker_types)
        self.default_package = default_package

    def process(self, round_env: Round) -> bool:
        """Generate a suite for every marked element; False on any failure."""
        return self.process_round(round_env).ok

    def process_round(self, round_env: Round) -> RoundResult:
        self.filer.reset()
        declarations = scan(round_env, self.marker_types)
        result = RoundResult()

        for index, declaration in enumerate(declarations):
            outcome = self.generate(declaration)
            result.outcomes.append(outcome)

            if outcome.state is GenerationState.INVALID:
                result.ok = False
            elif outcome.state is GenerationState.FAILED:
                result.ok = False
                result.skipped = len(declarations) - index - 1
                break

        logger.info(
            "Round finished: %d generated, %d declaration(s), ok=%s",
            len(result.generated), len(declarations), result.ok,
        )
        return result

    def generate(self, declaration: MarkerDeclaration) -> GenerationOutcome:
        """Run one declaration through the pipeline."""
        element = declaration.element
        outcome = GenerationOutcome(declaration=declaration)

        self.messager.note(
            f"Generating Exceptable test suite for {element.name}...", element
        )

        problem = validate_declaration(declaration)
        if problem is not None:
            outcome.state = GenerationState.INVALID
            outcome.error = problem
            self.messager.error(f"Invalid @TestSource on {element.name}: {problem}", element)
            return outcome

        outcome.package = resolve_package(declaration, self.default_package)
        problem = validate_package(outcome.package)
        if problem is not None:
            outcome.state = GenerationState.INVALID
            outcome.error = problem
            self.messager.error(f"Invalid @TestSource on {element.name}: {problem}", element)
            return outcome
        outcome.state = GenerationState.RESOLVED

        table = build_substitutions(
            outcome.package, declaration.exceptable_class, declaration.test_source
        )
        outcome.state = GenerationState.SUBSTITUTED

        source = render(table)
        outcome.artifact = artifact_name(outcome.package, declaration.exceptable_class)
        outcome.state = GenerationState.RENDERED

        try:
            artifact = self.filer.create_source_file(outcome.artifact)
            with artifact.open_writer() as writer:
                writer.write(source)
        except FilerError as e:
            outcome.state = GenerationState.FAILED
            outcome.error = str(e)
            self.messager.error(f"Code generation failed: {e}", element)
            return outcome

        outcome.state = GenerationState.EMITTED
        logger.info("Generated %s from %s", outcome.artifact, element.qualified_name)
        return outcome
