"""Tests for CLI commands."""

from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rulekit import __version__
from rulekit.cli import _parse_choices, app


class TestCLI:
    """Test CLI commands."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Create CLI test runner."""
        return CliRunner()

    def test_version_flag(self, runner: CliRunner) -> None:
        """Test --version prints and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "RuleKit version" in result.stdout

    def test_version_without_installed_metadata(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the package version is shown when distribution metadata is missing."""

        def _missing(name: str) -> str:
            raise PackageNotFoundError(name)

        monkeypatch.setattr("rulekit.cli.get_version", _missing)

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"RuleKit version {__version__}" in result.stdout

    def test_version_command(self, runner: CliRunner) -> None:
        """Test the version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "RuleKit version" in result.stdout

    def test_list(self, runner: CliRunner, content_root: Path, query_section: Path) -> None:
        """Test list shows sections and target formats."""
        result = runner.invoke(app, ["list", "--sections-dir", str(content_root)])

        assert result.exit_code == 0
        assert "tanstack-query" in result.stdout
        assert "cursor" in result.stdout
        assert "copilot" in result.stdout

    def test_install_non_interactive(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test install with every choice given as options."""
        result = runner.invoke(
            app,
            [
                "install",
                "--target", str(target_dir),
                "--section", "tanstack-query",
                "--ide", "cursor",
                "--sections-dir", str(content_root),
            ],
        )

        assert result.exit_code == 0, result.stdout
        assert "tanstack-query-index.mdc" in result.stdout
        assert "Done!" in result.stdout
        assert (target_dir / ".cursor" / "rules" / "tanstack-query-decisions.mdc").exists()

    def test_install_sections_dir_from_env(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test the content root can come from the environment."""
        result = runner.invoke(
            app,
            ["install", "--target", str(target_dir), "--all", "--ide", "copilot"],
            env={"RULEKIT_SECTIONS_DIR": str(content_root)},
        )

        assert result.exit_code == 0, result.stdout
        assert (
            target_dir / ".github" / "instructions" / "tanstack-query-guides.instructions.md"
        ).exists()

    def test_install_interactive(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test prompts for directory, sections and IDE."""
        result = runner.invoke(
            app,
            ["install", "--sections-dir", str(content_root)],
            input=f"{target_dir}\n2\n2\n",
        )

        assert result.exit_code == 0, result.stdout
        assert "Available sections:" in result.stdout
        assert "GitHub Copilot" in result.stdout
        assert (target_dir / ".github" / "instructions").is_dir()

    def test_install_dry_run(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test dry run lists planned files without writing."""
        result = runner.invoke(
            app,
            [
                "install",
                "--target", str(target_dir),
                "--section", "tanstack-query",
                "--ide", "cursor",
                "--sections-dir", str(content_root),
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.stdout
        assert "Dry run" in result.stdout
        assert list(target_dir.iterdir()) == []

    def test_install_missing_target(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a missing target directory exits with an error."""
        result = runner.invoke(
            app,
            ["install", "--target", str(tmp_path / "nope"), "--all", "--ide", "cursor"],
        )

        assert result.exit_code == 1
        assert "Directory not found" in result.stdout

    def test_install_unknown_section_fails(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test a failing section is reported and the exit code is 1."""
        result = runner.invoke(
            app,
            [
                "install",
                "--target", str(target_dir),
                "--section", "missing-section",
                "--section", "tanstack-query",
                "--ide", "cursor",
                "--sections-dir", str(content_root),
            ],
        )

        assert result.exit_code == 1
        assert "Failed sections:" in result.stdout
        assert (target_dir / ".cursor" / "rules" / "tanstack-query-index.mdc").exists()

    def test_install_unknown_ide(
        self, runner: CliRunner, content_root: Path, target_dir: Path, query_section: Path,
    ) -> None:
        """Test an unknown IDE identifier is a configuration error."""
        result = runner.invoke(
            app,
            [
                "install",
                "--target", str(target_dir),
                "--all",
                "--ide", "vim",
                "--sections-dir", str(content_root),
            ],
        )

        assert result.exit_code == 1
        assert "Unknown emitter" in result.stdout

    def test_parse_choices(self) -> None:
        """Test menu input parsing skips junk entries."""
        assert _parse_choices(" 1, 3,x,,2 ") == [1, 3, 2]
