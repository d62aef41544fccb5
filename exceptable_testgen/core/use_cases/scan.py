"""
Scan use case — list the declarations a generate run would process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from exceptable_testgen.core.config.loader import (
    ConfigError,
    config_root,
    find_config_file,
    load_config,
    resolve_path,
)
from exceptable_testgen.core.models.config import GeneratorConfig
from exceptable_testgen.core.models.element import Round
from exceptable_testgen.core.services.generator import (
    resolve_package,
    validate_declaration,
    validate_package,
)
from exceptable_testgen.core.services.generators.exceptable_test import artifact_name
from exceptable_testgen.core.services.scanner import scan
from exceptable_testgen.core.services.source_discovery import DiscoveryError, discover_round


@dataclass
class ScanEntry:
    element: str
    test_source: str
    exceptable_class: str
    package: str | None
    artifact: str | None
    source_file: str | None = None
    problem: str | None = None

    def to_dict(self) -> dict:
        return {
            "element": self.element,
            "test_source": self.test_source,
            "exceptable_class": self.exceptable_class,
            "package": self.package,
            "artifact": self.artifact,
            "source_file": self.source_file,
            "problem": self.problem,
        }


@dataclass
class ScanResult:
    """Result of scanning configuration and source roots."""

    config_path: Path | None = None
    entries: list[ScanEntry] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "error": self.error,
            "total": len(self.entries),
            "declarations": [e.to_dict() for e in self.entries],
        }


def load_round(config: GeneratorConfig, root: Path) -> Round:
    """Build the round for a run: explicit declarations first, then sources.

    Raises:
        DiscoveryError: If a discovered source file cannot be read.
    """
    elements = [ref.to_element() for ref in config.declarations]
    roots = [resolve_path(root, r) for r in config.source_roots]
    if roots:
        elements.extend(discover_round(roots).elements)
    return Round(elements=elements)


def run_scan(config_path: Path | None = None) -> ScanResult:
    """Scan without generating anything.

    Args:
        config_path: Optional explicit path to testgen.yml.
    """
    result = ScanResult()

    try:
        if config_path is None:
            config_path = find_config_file()
        config = load_config(config_path)
        assert config_path is not None  # load_config raises otherwise
        result.config_path = config_path
        round_env = load_round(config, config_root(config_path))
    except (ConfigError, DiscoveryError) as e:
        result.error = str(e)
        return result

    for declaration in scan(round_env, config.marker_types):
        problem = validate_declaration(declaration)
        package = None if problem else resolve_package(declaration, config.default_package)
        if package is not None and (problem := validate_package(package)):
            package = None
        result.entries.append(ScanEntry(
            element=declaration.element.qualified_name,
            test_source=declaration.test_source,
            exceptable_class=declaration.exceptable_class,
            package=package,
            artifact=artifact_name(package, declaration.exceptable_class) if package else None,
            source_file=declaration.element.source_file,
            problem=problem,
        ))

    return result
