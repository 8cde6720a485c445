"""Tests for the command-line interface."""

import logging

import pytest

from tablequill.cli import create_parser, main
from tablequill.version import __version__

MARKUP = "<table border=\"1\"><tr><td>Hello</td><td>{pn}/{pc}</td></tr></table>"


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """The render command installs its own handler on the root logger."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestCli:
    """Test suite for the CLI."""

    def test_version(self, capsys):
        assert main(["version"]) == 0

        assert f"TableQuill v{__version__}" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0

        assert "usage: tablequill" in capsys.readouterr().out

    def test_render_defaults(self):
        args = create_parser().parse_args(["render", "in.html"])

        assert args.orientation == "P"
        assert args.unit == "mm"
        assert args.size == "A4"
        assert args.single_page is False

    def test_render_to_pdf(self, tmp_path, capsys):
        source = tmp_path / "table.html"
        source.write_text(MARKUP, encoding="utf-8")
        footer = tmp_path / "footer.html"
        footer.write_text("<table><tr><td>{pn}</td></tr></table>", encoding="utf-8")
        output = tmp_path / "out.pdf"

        code = main([
            "render", str(source), "-o", str(output),
            "--orientation", "L", "--font", "Times", "--font-size", "9",
            "--footer", str(footer), "--log-level", "ERROR",
        ])

        assert code == 0
        assert output.read_bytes().startswith(b"%PDF")
        assert "Saved" in capsys.readouterr().out

    def test_default_output_path(self, tmp_path):
        source = tmp_path / "table.html"
        source.write_text(MARKUP, encoding="utf-8")

        assert main(["render", str(source), "--log-level", "ERROR"]) == 0

        assert (tmp_path / "table.pdf").exists()

    def test_missing_input(self, tmp_path, capsys):
        code = main(["render", str(tmp_path / "missing.html"), "--log-level", "ERROR"])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_library_errors_exit_with_one(self, tmp_path, capsys):
        source = tmp_path / "table.html"
        source.write_text("<table><tr><td><img src=\"nope.png\"></td></tr></table>", encoding="utf-8")

        code = main(["render", str(source), "-o", str(tmp_path / "out.pdf"), "--log-level", "ERROR"])

        assert code == 1
        assert "Image does not exist" in capsys.readouterr().err
