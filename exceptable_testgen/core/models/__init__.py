"""
Domain models — Pydantic types for the test-suite generator.

All models are re-exported here for convenient access:

    from exceptable_testgen.core.models import ProgramElement, Round, MarkerDeclaration
"""

from exceptable_testgen.core.models.config import DeclarationRef, EnclosingRef, GeneratorConfig
from exceptable_testgen.core.models.declaration import (
    DEFAULT_PACKAGE,
    TEST_SOURCE_MARKER,
    MarkerDeclaration,
)
from exceptable_testgen.core.models.diagnostic import Diagnostic, DiagnosticKind
from exceptable_testgen.core.models.element import ElementKind, ProgramElement, Round
from exceptable_testgen.core.models.template import GeneratedFile

__all__ = [
    # declaration.py
    "DEFAULT_PACKAGE",
    # config.py
    "DeclarationRef",
    # diagnostic.py
    "Diagnostic",
    "DiagnosticKind",
    # element.py
    "ElementKind",
    "EnclosingRef",
    # template.py
    "GeneratedFile",
    "GeneratorConfig",
    "MarkerDeclaration",
    "ProgramElement",
    "Round",
    "TEST_SOURCE_MARKER",
]
