"""
Tests for CLI commands — generate, scan, render, config check, and global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from exceptable_testgen.main import cli


def _make_config(tmp_path: Path, body: str | None = None) -> Path:
    """Create a testgen.yml with one explicit declaration."""
    content = textwrap.dedent(body or """\
        output_dir: out
        declarations:
          - name: FooTestSource
            exceptable_class: Foo
            package_name: com.x
    """)
    config = tmp_path / "testgen.yml"
    config.write_text(content)
    return config


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Exceptable test-suite generator" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def test_generate_writes_suite(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate"])
        assert result.exit_code == 0, result.output
        assert "com.x.FooTest" in result.output
        assert "1 suite(s) generated" in result.output
        assert (tmp_path / "out" / "com" / "x" / "FooTest.java").is_file()

    def test_generate_json(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["generated"] == ["com.x.FooTest"]
        assert data["diagnostics"][0]["kind"] == "note"

    def test_generate_dry_run(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate", "--dry-run"])
        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert not (tmp_path / "out").exists()

    def test_generate_output_dir(self, tmp_path: Path):
        config = _make_config(tmp_path)
        target = tmp_path / "alt"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "generate", "-o", str(target)],
        )
        assert result.exit_code == 0
        assert (target / "com" / "x" / "FooTest.java").is_file()

    def test_generate_invalid_declaration_exits_1(self, tmp_path: Path):
        config = _make_config(tmp_path, """\
            declarations:
              - {name: FooTestSource, package_name: com.x}
        """)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "generate", "--dry-run"])
        assert result.exit_code == 1
        assert "Code generation failed" in result.output

    def test_generate_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["generate"])
        assert result.exit_code == 1
        assert "No testgen.yml" in result.output


class TestScanCommand:
    def test_scan_json(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "scan", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total"] == 1
        assert data["declarations"][0]["artifact"] == "com.x.FooTest"

    def test_scan_text(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "scan"])
        assert result.exit_code == 0
        assert "Declarations: 1" in result.output
        assert "→ com.x.FooTest" in result.output


class TestRenderCommand:
    def test_render_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", "-e", "Foo", "-t", "FooTestSource", "-p", "com.x"],
        )
        assert result.exit_code == 0
        assert "package com.x;" in result.stdout
        assert "class FooTest extends FooTestSource" in result.stdout

    def test_render_default_package(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-e", "Foo", "-t", "FooTestSource"])
        assert result.exit_code == 0
        assert "package red.enspi.exceptable;" in result.stdout

    def test_render_rejects_bad_class(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-e", "not valid", "-t", "S"])
        assert result.exit_code == 1
        assert "package" not in result.output


class TestConfigCheckCommand:
    def test_valid(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_json(self, tmp_path: Path):
        config = _make_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["declaration_count"] == 1

    def test_duplicate_suites(self, tmp_path: Path):
        config = _make_config(tmp_path, """\
            declarations:
              - {name: One, exceptable_class: Foo, package_name: p}
              - {name: Two, exceptable_class: Foo, package_name: p}
        """)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "both generate p.FooTest" in result.output
