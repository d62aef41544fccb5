"""
Generate use case — run one round from testgen.yml and write the suites.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from exceptable_testgen.core.config.loader import (
    ConfigError,
    config_root,
    find_config_file,
    load_config,
    resolve_path,
)
from exceptable_testgen.core.models.diagnostic import Diagnostic
from exceptable_testgen.core.services.filer import Filer, MemoryFiler
from exceptable_testgen.core.services.generator import GenerationOutcome, Generator
from exceptable_testgen.core.services.messager import Messager
from exceptable_testgen.core.services.source_discovery import DiscoveryError
from exceptable_testgen.core.use_cases.scan import load_round

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
    """Result of a generate run."""

    ok: bool = False
    error: str | None = None
    config_path: Path | None = None
    output_dir: Path | None = None
    dry_run: bool = False
    outcomes: list[GenerationOutcome] = field(default_factory=list)
    skipped: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files: dict[str, str] = field(default_factory=dict)  # dry run: name → content

    @property
    def generated(self) -> list[str]:
        return [o.artifact for o in self.outcomes if o.ok and o.artifact]

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "config_path": str(self.config_path) if self.config_path else None,
            "output_dir": str(self.output_dir) if self.output_dir else None,
            "dry_run": self.dry_run,
            "generated": self.generated,
            "skipped": self.skipped,
            "declarations": [o.to_dict() for o in self.outcomes],
            "diagnostics": [d.model_dump(mode="json") for d in self.diagnostics],
        }


def run_generate(
    config_path: Path | None = None,
    *,
    output_dir: Path | None = None,
    dry_run: bool = False,
) -> GenerateResult:
    """Generate a test suite for every @TestSource declaration.

    Args:
        config_path: Optional explicit path to testgen.yml.
        output_dir: Overrides the configured output directory.
        dry_run: Render into memory instead of writing files.

    Returns:
        GenerateResult; ``ok`` is False when any declaration failed.
    """
    result = GenerateResult(dry_run=dry_run)

    try:
        if config_path is None:
            config_path = find_config_file()
        config = load_config(config_path)
        assert config_path is not None  # load_config raises otherwise
        result.config_path = config_path
        root = config_root(config_path)
        round_env = load_round(config, root)
    except (ConfigError, DiscoveryError) as e:
        result.error = str(e)
        return result

    result.output_dir = output_dir or resolve_path(root, config.output_dir)
    filer: Filer = MemoryFiler(result.output_dir) if dry_run else Filer(result.output_dir)
    messager = Messager()
    generator = Generator(
        filer,
        messager,
        marker_types=config.marker_types,
        default_package=config.default_package,
    )

    round_result = generator.process_round(round_env)

    result.ok = round_result.ok
    result.outcomes = round_result.outcomes
    result.skipped = round_result.skipped
    result.diagnostics = list(messager.diagnostics)
    if isinstance(filer, MemoryFiler):
        result.files = dict(filer.files)

    if not result.outcomes:
        logger.warning("No @TestSource declarations found")
    return result
