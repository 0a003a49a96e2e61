"""End-to-end tests for the syntaxmark command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from syntaxmark import __version__
from syntaxmark.cli import EXIT_FAILURE, main

if TYPE_CHECKING:
    from pathlib import Path


class TestRender:
    def test_writes_html_to_output_file(self, write_source, tmp_path: Path) -> None:
        source = write_source(b"int x;\n")
        output = tmp_path / "out.html"

        main(["-f", str(source), "-o", str(output)])

        html = output.read_bytes()
        heading = f'<html>\n<a name="{source}"></a><h3>{source}</h3>\n'
        assert html.startswith(heading.encode())
        assert b"<font color=#00ee00>int</font> x;\n" in html
        assert html.endswith(b"</pre>\n</html>\n")

    def test_long_options(self, write_source, tmp_path: Path) -> None:
        source = write_source(b"return;\n")
        output = tmp_path / "out.html"

        main(["--file", str(source), "--output", str(output)])

        assert b"<font color=#c0c000>return</font>;" in output.read_bytes()

    def test_defaults_to_stdout(self, write_source, capsysbinary) -> None:
        source = write_source(b"char c;\n")

        main(["-f", str(source)])

        out = capsysbinary.readouterr().out
        assert b"<font color=#00ee00>char</font> c;\n" in out

    def test_env_overrides_line_number_width(
        self, write_source, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SYNTAXMARK_RENDER__LINE_NUMBER_WIDTH", "3")
        source = write_source(b"x\n")
        output = tmp_path / "out.html"

        main(["-f", str(source), "-o", str(output)])

        assert b"<font color=#000000>000</font> x\n" in output.read_bytes()


class TestUsageErrors:
    def test_missing_file_option_prints_usage(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == EXIT_FAILURE
        assert "usage:" in capsys.readouterr().err

    def test_help_exits_zero(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0
        assert "--file" in capsys.readouterr().out

    def test_unknown_option_fails(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--colour"])
        assert exc_info.value.code != 0

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_invalid_configuration(self, write_source, monkeypatch, capsys) -> None:
        monkeypatch.setenv("SYNTAXMARK_LOG__LEVEL", "chatty")
        source = write_source(b"x\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["-f", str(source)])

        assert exc_info.value.code == EXIT_FAILURE
        assert "invalid configuration" in capsys.readouterr().err


class TestOpenFailures:
    def test_missing_input(self, tmp_path: Path, capsys) -> None:
        missing = tmp_path / "missing.c"
        output = tmp_path / "out.html"

        with pytest.raises(SystemExit) as exc_info:
            main(["-f", str(missing), "-o", str(output)])

        assert exc_info.value.code == EXIT_FAILURE
        captured = capsys.readouterr()
        assert "error: could not open" in captured.err
        assert "missing.c" in captured.err
        assert captured.out == ""
        assert not output.exists()

    def test_missing_input_keeps_existing_output(self, tmp_path: Path) -> None:
        output = tmp_path / "out.html"
        output.write_text("previous")

        with pytest.raises(SystemExit):
            main(["-f", str(tmp_path / "missing.c"), "-o", str(output)])

        assert output.read_text() == "previous"

    def test_unwritable_output(self, write_source, tmp_path: Path, capsys) -> None:
        source = write_source(b"x\n")
        output = tmp_path / "no-such-dir" / "out.html"

        with pytest.raises(SystemExit) as exc_info:
            main(["-f", str(source), "-o", str(output)])

        assert exc_info.value.code == EXIT_FAILURE
        assert "error: could not open" in capsys.readouterr().err


class TestDebugDumps:
    def test_dump_syntax_lists_rules(self, capsys) -> None:
        main(["--dump-syntax"])

        out = capsys.readouterr().out
        assert "#include" in out
        assert "NULL" in out
        assert "nl" in out

    def test_dump_syntax_needs_no_file(self, capsys) -> None:
        main(["-s"])
        assert "Open pattern" in capsys.readouterr().out

    def test_dump_tags_prints_annotations_instead_of_html(
        self, write_source, tmp_path: Path, capsys
    ) -> None:
        source = write_source(b"int x;\n")
        output = tmp_path / "out.html"

        main(["-f", str(source), "-o", str(output), "--dump-tags"])

        out = capsys.readouterr().out
        assert "000001" in out
        assert "000004" in out
        assert "<font color=#00ee00>" in out
        assert not output.exists()
