"""Tests for the nml command line."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from nml import __version__
from nml.cli.main import cli

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def write_doc(tmp_path: Path):
    def _write(source: str, name: str = "doc.nml") -> str:
        path = tmp_path / name
        path.write_text(source)
        return str(path)

    return _write


# ---------------------------------------------------------------------------
# nml compile
# ---------------------------------------------------------------------------


class TestCompileCommand:
    def test_html_default(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["compile", str(FIXTURES / "landing.nml")])
        assert result.exit_code == 0
        assert result.output.startswith("<style>:root {")
        assert "<footer" in result.output

    def test_css(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["compile", write_doc("p pad=8 t=x"), "--format", "css"])
        assert result.exit_code == 0
        assert result.output.startswith(":root {")
        assert "{ padding: 8px; }" in result.output
        assert "<p" not in result.output

    def test_json(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["compile", write_doc("p t=x\n}"), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["tree"]["id"] == "app"
        assert data["tree"]["children"] == [{"tag": "p", "text": "x"}]
        assert data["diagnostics"][0]["rule"] == "stray-brace"

    def test_output_file(self, runner: CliRunner, write_doc, tmp_path: Path) -> None:
        out = tmp_path / "page.html"
        result = runner.invoke(cli, ["compile", write_doc("p t=x"), "-o", str(out)])
        assert result.exit_code == 0
        assert f"Wrote html to {out}" in result.output
        assert out.read_text().endswith("<p>x</p>")

    def test_missing_file(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["compile", "/nonexistent/doc.nml"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# nml check
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_clean(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["check", write_doc("p t=hi")])
        assert result.exit_code == 0
        assert "OK: doc.nml compiled cleanly (0 diagnostics)" in result.output

    def test_warnings_listed(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["check", write_doc("p t=x\n}")])
        assert result.exit_code == 0
        assert "WARNING [line=2]:" in result.output
        assert "Summary: 1 warning(s), 0 info" in result.output

    def test_strict_fails_on_warnings(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["check", "--strict", write_doc("p t=x\n}")])
        assert result.exit_code == 1

    def test_strict_passes_on_info_only(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "--strict", str(FIXTURES / "landing.nml")])
        assert result.exit_code == 0
        assert "Summary: 0 warning(s), 1 info" in result.output

    def test_verbose(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["--verbose", "check", write_doc("p t=hi")])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# nml inspect
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_outline(self, runner: CliRunner, write_doc) -> None:
        result = runner.invoke(cli, ["inspect", write_doc("c .card {\n  p t=hi\n}")])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "Tree:"
        assert lines[1] == "  article.card"
        assert lines[2] == '    p "hi"'

    def test_counts(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inspect", str(FIXTURES / "landing.nml")])
        assert result.exit_code == 0
        assert "Media blocks: 2" in result.output
        assert "Keyframes: 1" in result.output
        assert "Diagnostics: 1" in result.output


class TestVersion:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
