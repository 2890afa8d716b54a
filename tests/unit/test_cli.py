"""Tests for manuscript_kit.cli, the ``manuscript`` command."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from manuscript_kit.cli import app

runner = CliRunner()

MANIFEST = """\
frontmatter:
  markdown/preface.md
mainmatter:
  markdown/0.Functions/title.md
    markdown/0.Functions/closures.md
    # markdown/Functions/closures.md
backmatter:
  markdown/colophon.md
"""


@pytest.fixture
def book(tmp_path: Path) -> Path:
    files = {
        "markdown/preface.md": "Preface\n",
        "markdown/0.Functions/title.md": "# Functions\n",
        "markdown/0.Functions/closures.md": "Closures\n",
        "markdown/Functions/closures.md": "Old closures\n",
        "markdown/colophon.md": "Colophon\n",
        "markdown/unused.md": "Unused\n",
    }
    for rel, content in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    (tmp_path / "Sample.txt").write_text(MANIFEST, encoding="utf-8")
    return tmp_path


class TestAssembleCommand:
    def test_prints_manuscript(self, book: Path) -> None:
        result = runner.invoke(app, ["assemble", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 0
        assert "{mainmatter}\n\n# Functions\n\nClosures" in result.stdout
        assert "Old closures" not in result.stdout

    def test_writes_output_file(self, book: Path) -> None:
        out = book / "build" / "manuscript.md"

        result = runner.invoke(
            app,
            ["assemble", str(book / "Sample.txt"), "--root", str(book), "--output", str(out)],
        )

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == (
            "{frontmatter}\n\nPreface\n\n"
            "{mainmatter}\n\n# Functions\n\nClosures\n\n"
            "{backmatter}\n\nColophon\n"
        )

    def test_missing_fragment_exits_with_error(self, book: Path) -> None:
        (book / "markdown" / "colophon.md").unlink()

        result = runner.invoke(app, ["assemble", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 1
        assert "FragmentNotFoundError" in result.output
        assert "markdown/colophon.md" in result.output

    def test_bad_manifest_exits_with_error(self, book: Path) -> None:
        (book / "Sample.txt").write_text("appendix:\n  a.md\n", encoding="utf-8")

        result = runner.invoke(app, ["assemble", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 1
        assert "ManifestFormatError" in result.output

    def test_duplicate_policy_option(self, book: Path) -> None:
        (book / "Sample.txt").write_text(
            "frontmatter:\n  markdown/preface.md\nbackmatter:\n  markdown/preface.md\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            app,
            [
                "assemble",
                str(book / "Sample.txt"),
                "--root",
                str(book),
                "--duplicates",
                "error",
            ],
        )

        assert result.exit_code == 1
        assert "DuplicatePathError" in result.output

    def test_rejects_unknown_duplicate_policy(self, book: Path) -> None:
        result = runner.invoke(
            app,
            ["assemble", str(book / "Sample.txt"), "--duplicates", "merge"],
        )

        assert result.exit_code == 2

    def test_config_file(self, book: Path) -> None:
        config = book / "assembly.yaml"
        config.write_text("section_markers: false\n", encoding="utf-8")
        out = book / "manuscript.md"

        result = runner.invoke(
            app,
            [
                "assemble",
                str(book / "Sample.txt"),
                "--root",
                str(book),
                "--config",
                str(config),
                "--output",
                str(out),
            ],
        )

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == (
            "Preface\n\n# Functions\n\nClosures\n\nColophon\n"
        )


def test_flatten_lists_enabled_paths(book: Path) -> None:
    result = runner.invoke(app, ["flatten", str(book / "Sample.txt")])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "frontmatter\tmarkdown/preface.md",
        "mainmatter\tmarkdown/0.Functions/title.md",
        "mainmatter\tmarkdown/0.Functions/closures.md",
        "backmatter\tmarkdown/colophon.md",
    ]


class TestCheckCommand:
    def test_reports_disabled_and_orphans(self, book: Path) -> None:
        result = runner.invoke(app, ["check", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 0
        assert "disabled  markdown/Functions/closures.md" in result.stdout
        assert "orphan    markdown/unused.md" in result.stdout
        assert "orphan    markdown/Functions/closures.md" not in result.stdout

    def test_missing_fragment_fails(self, book: Path) -> None:
        (book / "markdown" / "preface.md").unlink()

        result = runner.invoke(app, ["check", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 1
        assert "missing   markdown/preface.md  frontmatter[0] (line 2)" in result.stdout

    def test_duplicates_fail_under_error_policy(self, book: Path) -> None:
        (book / "Sample.txt").write_text(
            "frontmatter:\n  markdown/preface.md\nbackmatter:\n  markdown/preface.md\n",
            encoding="utf-8",
        )
        args = ["check", str(book / "Sample.txt"), "--root", str(book)]

        warned = runner.invoke(app, args)
        failed = runner.invoke(app, [*args, "--duplicates", "error"])

        assert warned.exit_code == 0
        assert failed.exit_code == 1
        assert "duplicate markdown/preface.md  frontmatter[0] (line 2)" in failed.stdout

    def test_bad_config_exits_with_error(self, book: Path) -> None:
        config = book / "assembly.yaml"
        config.write_text("section_marker: false\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["check", str(book / "Sample.txt"), "--root", str(book), "--config", str(config)],
        )

        assert result.exit_code == 1
        assert "error: ValidationError" in result.output


class TestUnreadableInput:
    def test_undecodable_fragment(self, book: Path) -> None:
        (book / "markdown" / "preface.md").write_bytes(b"\xff\xfe bad")

        result = runner.invoke(app, ["assemble", str(book / "Sample.txt"), "--root", str(book)])

        assert result.exit_code == 1
        assert "error: FragmentReadError: Fragment 'markdown/preface.md'" in result.output
        assert "frontmatter[0], manifest line 2" in result.output

    def test_unknown_config_key(self, book: Path) -> None:
        config = book / "assembly.yaml"
        config.write_text("section_marker: false\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["assemble", str(book / "Sample.txt"), "--root", str(book), "--config", str(config)],
        )

        assert result.exit_code == 1
        assert "error: ValidationError" in result.output
        assert "section_marker" in result.output

    def test_malformed_yaml_config(self, book: Path) -> None:
        config = book / "assembly.yaml"
        config.write_text("duplicates: [warn\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["assemble", str(book / "Sample.txt"), "--root", str(book), "--config", str(config)],
        )

        assert result.exit_code == 1
        assert "error: " in result.output
        assert "Traceback" not in result.output

    def test_undecodable_manifest(self, book: Path) -> None:
        (book / "Sample.txt").write_bytes(b"frontmatter:\n  \xff.md\n")

        result = runner.invoke(app, ["flatten", str(book / "Sample.txt")])

        assert result.exit_code == 1
        assert "error: UnicodeDecodeError" in result.output
