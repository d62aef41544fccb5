"""
Config check use case — validate testgen.yml and report issues.
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
from exceptable_testgen.core.models.declaration import MarkerDeclaration
from exceptable_testgen.core.services.generator import (
    resolve_package,
    validate_declaration,
    validate_package,
)
from exceptable_testgen.core.services.generators.exceptable_test import artifact_name


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "output_dir": self.config.output_dir if self.config else None,
            "declaration_count": len(self.config.declarations) if self.config else 0,
            "source_root_count": len(self.config.source_roots) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate generator configuration and report issues.

    Args:
        config_path: Optional explicit path to testgen.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No testgen.yml found.")
        return result

    result.config_path = config_path

    # Load and validate
    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    if not config.declarations and not config.source_roots:
        result.warnings.append(
            "No declarations or source roots defined. Nothing will be generated."
        )

    if not config.marker_types:
        result.errors.append("marker_types is empty; no declaration can be discovered.")

    root = config_root(config_path)
    for raw in config.source_roots:
        if not resolve_path(root, raw).exists():
            result.warnings.append(f"Source root does not exist: {raw}")

    # Explicit declarations: attributes and artifact name collisions
    artifacts: dict[str, str] = {}
    for ref in config.declarations:
        declaration = MarkerDeclaration(
            element=ref.to_element(),
            marker_type=ref.marker_type,
            package_name=ref.package_name or None,
            exceptable_class=ref.exceptable_class.strip(),
        )
        problem = validate_declaration(declaration)
        if problem:
            result.errors.append(f"Declaration '{ref.name}': {problem}")
            continue

        package = resolve_package(declaration, config.default_package)
        problem = validate_package(package)
        if problem:
            result.errors.append(f"Declaration '{ref.name}': {problem}")
            continue

        name = artifact_name(package, declaration.exceptable_class)
        if name in artifacts:
            result.errors.append(
                f"Declarations '{artifacts[name]}' and '{ref.name}' both generate {name}"
            )
        else:
            artifacts[name] = ref.name

    # Result
    result.valid = len(result.errors) == 0
    return result
