"""Tests for the batch driver."""

import json
import logging
from pathlib import Path

import pytest

from svextract.batch import discover_files, extract_files, load_accumulator, write_output
from svextract.config import ExtractConfig
from svextract.diagnostics import DiagnosticCode, InvalidDefinitionError, SourceReadError
from svextract.enums import OutputFormat

HEADER = "<script>\n  import { _, defineMessages } from 'svelte-i18n';\n</script>\n"


def _component(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(HEADER + body, encoding="utf-8")
    return path


class TestDiscoverFiles:
    """Glob discovery."""

    def test_filters_and_sorts(self, tmp_path: Path) -> None:
        _component(tmp_path / "b" / "Nav.svelte", "")
        _component(tmp_path / "a" / "App.svelte", "")
        _component(tmp_path / "index.HTML", "")
        (tmp_path / "script.js").write_text("")
        found = discover_files(str(tmp_path / "**" / "*"))
        assert found == sorted(found)
        assert {path.name for path in found} == {"Nav.svelte", "App.svelte", "index.HTML"}


class TestLoadAccumulator:
    """Seeding from an existing output file."""

    def test_no_output(self) -> None:
        assert load_accumulator(None, ExtractConfig()) == {}

    def test_seed_from_json(self, tmp_path: Path) -> None:
        output = tmp_path / "en.json"
        output.write_text('{"app": {"title": "Kept"}}')
        assert load_accumulator(output, ExtractConfig()) == {"app": {"title": "Kept"}}

    def test_overwrite_ignores_existing(self, tmp_path: Path) -> None:
        output = tmp_path / "en.json"
        output.write_text('{"app": {"title": "Kept"}}')
        assert load_accumulator(output, ExtractConfig(overwrite=True)) == {}

    @pytest.mark.parametrize("content", ["not json", "[1, 2]"])
    def test_unreadable_output_warns(
        self, tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        output = tmp_path / "en.json"
        output.write_text(content)
        with caplog.at_level(logging.WARNING, logger="svextract.batch"):
            assert load_accumulator(output, ExtractConfig()) == {}
        assert "Could not read existing output" in caplog.text

    def test_seed_from_po(self, tmp_path: Path) -> None:
        output = tmp_path / "messages.po"
        output.write_text('msgid ""\nmsgstr ""\n\nmsgid "app.title"\nmsgstr "Kept"\n', encoding="utf-8")
        config = ExtractConfig(output_format=OutputFormat.PO)
        assert load_accumulator(output, config) == {"app": {"title": "Kept"}}


class TestExtractFiles:
    """Sequential extraction."""

    def test_first_file_wins(self, tmp_path: Path) -> None:
        first = _component(tmp_path / "A.svelte", "{$_('app.title', { default: 'A' })}")
        second = _component(tmp_path / "B.svelte", "{$_('app.title', { default: 'B' })}")
        assert extract_files([first, second], {}) == {"app": {"title": "A"}}

    def test_preprocess_applied(self, tmp_path: Path) -> None:
        path = _component(tmp_path / "A.svelte", "{$_('PLACEHOLDER')}")
        seen: list[str] = []

        def preprocess(source: str, filename: str) -> str:
            seen.append(filename)
            return source.replace("PLACEHOLDER", "app.title")

        assert extract_files([path], {}, shallow=True, preprocess=preprocess) == {"app.title": ""}
        assert seen == [str(path)]

    def test_invalid_definition_stops_batch(self, tmp_path: Path) -> None:
        bad = _component(
            tmp_path / "A.svelte",
            "<script context=\"module\">defineMessages({ ...base });</script>",
        )
        later = _component(tmp_path / "B.svelte", "{$_('never.reached')}")
        accumulator: dict[str, object] = {}
        with pytest.raises(InvalidDefinitionError):
            extract_files([bad, later], accumulator)
        assert accumulator == {}

    def test_undecodable_file_raises_with_filename(self, tmp_path: Path) -> None:
        path = tmp_path / "A.svelte"
        path.write_bytes(b"<p>caf\xe9</p>")
        with pytest.raises(SourceReadError) as exc_info:
            extract_files([path], {})
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.SOURCE_UNREADABLE
        assert diagnostic.filename == str(path)

    def test_preprocess_must_return_text(self, tmp_path: Path) -> None:
        path = _component(tmp_path / "A.svelte", "{$_('a')}")
        with pytest.raises(SourceReadError) as exc_info:
            extract_files([path], {}, preprocess=lambda source, filename: None)  # type: ignore[arg-type,return-value]
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.PREPROCESS_FAILED


class TestWriteOutput:
    """Output writing."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        output = tmp_path / "nested" / "dir" / "en.json"
        text = write_output({"a": "b"}, output)
        assert json.loads(output.read_text(encoding="utf-8")) == {"a": "b"}
        assert text == output.read_text(encoding="utf-8")

    def test_stdout_mode_returns_text(self) -> None:
        assert write_output({"a": "b"}, None) == '{\n  "a": "b"\n}'

    def test_po_output(self, tmp_path: Path) -> None:
        output = tmp_path / "messages.pot"
        write_output({"app": {"title": "Hi"}}, output, OutputFormat.PO)
        assert 'msgid "app.title"' in output.read_text(encoding="utf-8")
