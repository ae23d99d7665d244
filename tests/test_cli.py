"""Tests for the refmt command line, printers and settings."""

import io

import pytest
from click.testing import CliRunner

from tools.refmt.cli import main, resolve_formats
from tools.refmt.converter import FormattedText
from tools.refmt.printer import HighlightTextPrinter, PlainTextPrinter, select_printer
from tools.refmt.registry import Format
from tools.refmt.settings import DEFAULT_THEME, Settings

JSON_TEXT = """{
  "id": 123,
  "title": "Lorem ipsum dolor sit amet",
  "author": {
    "id": 999,
    "first_name": "John",
    "last_name": "Doe"
  }
}
"""

YAML_TEXT = """id: 123
title: Lorem ipsum dolor sit amet
author:
  id: 999
  first_name: John
  last_name: Doe
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def book_json(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(JSON_TEXT, encoding="utf-8")
    return path


class TestMain:
    """Test the refmt command."""

    def test_file_to_stdout(self, runner, book_json):
        """Test converting a file and printing the result."""
        result = runner.invoke(main, ["-i", str(book_json), "--output-format", "yaml"])

        assert result.exit_code == 0
        assert YAML_TEXT in result.output

    def test_stdin(self, runner):
        """Test reading from STDIN with an explicit format."""
        result = runner.invoke(main, ["--input-format", "YML", "--output-format", "json"], input=YAML_TEXT)

        assert result.exit_code == 0
        assert JSON_TEXT in result.output

    def test_output_file_format_from_extension(self, runner, book_json, tmp_path):
        """Test writing to a file whose extension picks the format."""
        output = tmp_path / "book.toml"

        result = runner.invoke(main, ["-i", str(book_json), "-o", str(output)])

        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "[author]" in text
        assert "\x1b[" not in text
        assert "Converted to" in result.output

    def test_output_defaults_to_input_format(self, runner):
        """Test that without an output format the input is pretty printed."""
        result = runner.invoke(main, ["--input-format", "json"], input='{"id":123}')

        assert result.exit_code == 0
        assert '{\n  "id": 123\n}\n' in result.output

    def test_cannot_infer_input(self, runner):
        """Test that a missing input format is a usage error."""
        result = runner.invoke(main, [], input="{}")

        assert result.exit_code == 2
        assert "cannot infer format" in result.output

    def test_unknown_input_extension(self, runner, tmp_path):
        """Test that an unknown extension is a usage error."""
        path = tmp_path / "app.conf"
        path.write_text("a = 1\n", encoding="utf-8")

        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == 2
        assert "unsupported format name" in result.output

    def test_unknown_output_extension(self, runner, book_json, tmp_path):
        """Test that an unknown output extension is not silently ignored."""
        result = runner.invoke(main, ["-i", str(book_json), "-o", str(tmp_path / "out.ini")])

        assert result.exit_code == 2

    def test_invalid_format_choice(self, runner):
        """Test that click rejects unknown format names."""
        result = runner.invoke(main, ["--input-format", "conf"], input="{}")

        assert result.exit_code == 2

    def test_conversion_error(self, runner):
        """Test that conversion failures exit 1 with a description and cause."""
        result = runner.invoke(main, ["--input-format", "yaml", "--output-format", "toml"], input="a: null\n")

        assert result.exit_code == 1
        assert "[refmt error]" in result.output
        assert "serialization" in result.output
        assert "TOML has no null value" in result.output

    def test_decode_error(self, runner):
        """Test that malformed input reports the parser's message."""
        result = runner.invoke(
            main,
            ["--input-format", "yaml", "--output-format", "json"],
            input="author:\n  id: 999\n first_name: John\n",
        )

        assert result.exit_code == 1
        assert "deserialization" in result.output
        assert "line 3" in result.output

    def test_forced_color(self, runner, book_json):
        """Test that --color highlights even when not on a terminal."""
        result = runner.invoke(main, ["-i", str(book_json), "--output-format", "yaml", "--color"])

        assert result.exit_code == 0
        assert "\x1b[" in result.output

    def test_no_color_env(self, runner, book_json):
        """Test that NO_COLOR disables highlighting."""
        result = runner.invoke(main, ["-i", str(book_json)], env={"NO_COLOR": "1"})

        assert result.exit_code == 0
        assert "\x1b[" not in result.output

    def test_non_utf8_input(self, runner, tmp_path):
        """Test that undecodable input is reported as a file error."""
        path = tmp_path / "bad.json"
        path.write_bytes(b'{"a": "\xff"}')

        result = runner.invoke(main, ["-i", str(path)])

        assert result.exit_code == 1
        assert "UTF-8" in result.output


class TestResolveFormats:
    """Test source and destination format selection."""

    def test_both_explicit(self):
        """Test explicit names for both sides."""
        assert resolve_formats(None, "json", None, "yaml") == (Format.JSON, Format.YAML)

    def test_from_file_names(self, tmp_path):
        """Test formats taken from file extensions."""
        assert resolve_formats(tmp_path / "a.yml", None, tmp_path / "b.toml", None) == (Format.YAML, Format.TOML)

    def test_destination_falls_back(self):
        """Test that an undetermined destination reuses the source format."""
        assert resolve_formats(None, "toml", None, None) == (Format.TOML, Format.TOML)


class TestPrinters:
    """Test output printers."""

    def test_plain_printer(self):
        """Test that the plain printer writes text unchanged."""
        stream = io.StringIO()

        PlainTextPrinter(stream).print(FormattedText(Format.YAML, YAML_TEXT))

        assert stream.getvalue() == YAML_TEXT

    def test_plain_printer_adds_newline(self):
        """Test that output always ends with a newline."""
        stream = io.StringIO()

        PlainTextPrinter(stream).print(FormattedText(Format.JSON, "{}"))

        assert stream.getvalue() == "{}\n"

    def test_select_plain_for_non_terminal(self):
        """Test that a non-terminal stream gets plain output."""
        assert isinstance(select_printer(io.StringIO(), DEFAULT_THEME), PlainTextPrinter)

    def test_select_plain_for_files(self):
        """Test that file output is never highlighted."""
        assert isinstance(select_printer(io.StringIO(), DEFAULT_THEME, color=True, to_file=True), PlainTextPrinter)

    def test_select_highlight_when_forced(self):
        """Test that forcing colour selects the highlighter."""
        printer = select_printer(io.StringIO(), "native", color=True)

        assert isinstance(printer, HighlightTextPrinter)
        assert printer.theme == "native"

    def test_highlight_output(self):
        """Test that highlighted output keeps the text and adds ANSI codes."""
        stream = io.StringIO()

        select_printer(stream, DEFAULT_THEME, color=True).print(FormattedText(Format.JSON, '{\n  "id": 123\n}\n'))

        output = stream.getvalue()
        assert "\x1b[" in output
        assert "123" in output


class TestSettings:
    """Test settings from the environment."""

    def test_defaults(self):
        """Test defaults with an empty environment."""
        settings = Settings.from_env({})

        assert settings.theme == DEFAULT_THEME
        assert settings.color is None
        assert settings.log_level == "INFO"

    def test_from_env(self):
        """Test reading environment variables."""
        settings = Settings.from_env({"REFMT_THEME": "native", "NO_COLOR": "1", "REFMT_LOG_LEVEL": "debug"})

        assert settings.theme == "native"
        assert settings.color is False
        assert settings.log_level == "DEBUG"

    def test_override(self):
        """Test that command line flags win over the environment."""
        settings = Settings.from_env({"NO_COLOR": "1"}).override(theme="native", color=True, verbose=True)

        assert settings.theme == "native"
        assert settings.color is True
        assert settings.log_level == "DEBUG"

    def test_override_keeps_unset(self):
        """Test that unset flags leave settings alone."""
        settings = Settings(theme="native").override()

        assert settings == Settings(theme="native")
