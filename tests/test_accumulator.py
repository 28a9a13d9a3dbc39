"""Tests for extraction.accumulator: merging and end-to-end extraction.

Scenario tests run real component text through the parser; property tests
generate components from (id, default) entries.
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from svextract import InvalidDefinitionError, extract_messages
from svextract.extraction import MessageRecord, collect_messages, merge_records
from svextract.syntax import parse
from tests.strategies import component_sources, flat_ids, message_entries, message_ids

IMPORT = "<script>\n  import { _, defineMessages } from 'svelte-i18n';\n</script>\n"


def _record(message_id: object, default: object = None) -> MessageRecord:
    fields: dict[str, object] = {"id": message_id}
    if default is not None:
        fields["default"] = default
    return MessageRecord(fields=fields)


# ============================================================================
# MERGE
# ============================================================================


class TestMergeRecords:
    """First-writer-wins merging."""

    def test_deep_mode_nests(self) -> None:
        accumulator = merge_records([_record("app.title", "Hi")], {})
        assert accumulator == {"app": {"title": "Hi"}}

    def test_shallow_mode_flat(self) -> None:
        accumulator = merge_records([_record("app.title", "Hi")], {}, shallow=True)
        assert accumulator == {"app.title": "Hi"}

    def test_missing_default_is_empty_string(self) -> None:
        assert merge_records([_record("a")], {}) == {"a": ""}

    def test_first_writer_wins_within_batch(self) -> None:
        records = [_record("a.b", "first"), _record("a.b", "second")]
        assert merge_records(records, {}) == {"a": {"b": "first"}}
        assert merge_records(records, {}, shallow=True) == {"a.b": "first"}

    def test_existing_accumulator_entries_kept(self) -> None:
        accumulator: dict[str, object] = {"a": {"b": "seeded"}}
        merge_records([_record("a.b", "new"), _record("a.c", "added")], accumulator)
        assert accumulator == {"a": {"b": "seeded", "c": "added"}}

    def test_records_without_string_id_skipped(self) -> None:
        records = [MessageRecord(fields={"default": "x"}), _record(5, "y")]
        assert merge_records(records, {}) == {}

    def test_path_conflict_logged_and_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        records = [_record("app", "plain"), _record("app.title", "nested"), _record("other", "ok")]
        with caplog.at_level(logging.WARNING, logger="svextract.extraction.accumulator"):
            accumulator = merge_records(records, {})
        assert accumulator == {"app": "plain", "other": "ok"}
        assert "app.title" in caplog.text

    def test_returns_same_accumulator(self) -> None:
        accumulator: dict[str, object] = {}
        assert merge_records([_record("a")], accumulator) is accumulator


# ============================================================================
# SCENARIOS
# ============================================================================


class TestExtractionScenarios:
    """End-to-end extraction through the parser."""

    CATALOG = (
        "<script>\n"
        "  import { defineMessages } from 'svelte-i18n';\n"
        "  const messages = defineMessages({\n"
        "    greeting: { id: 'app.greeting', default: 'Hi' },\n"
        "  });\n"
        "</script>\n"
    )

    def test_catalog_deep(self) -> None:
        assert extract_messages(self.CATALOG) == {"app": {"greeting": "Hi"}}

    def test_catalog_shallow(self) -> None:
        assert extract_messages(self.CATALOG, shallow=True) == {"app.greeting": "Hi"}

    def test_id_only_call(self) -> None:
        source = IMPORT + "<h1>{$_('app.title')}</h1>"
        assert extract_messages(source, shallow=True) == {"app.title": ""}

    def test_null_default_at_list_index_wins(self) -> None:
        source = IMPORT + (
            "<p>{$_({ id: 'steps[0]', default: null })}</p>"
            "<p>{$_({ id: 'steps[0]', default: 'Later' })}</p>"
        )
        assert extract_messages(source) == {"steps": [None]}

    def test_id_with_default(self) -> None:
        source = IMPORT + "<h1>{$_('app.title', { default: 'Welcome' })}</h1>"
        assert extract_messages(source) == {"app": {"title": "Welcome"}}

    def test_two_files_first_writer_wins(self) -> None:
        file_a = IMPORT + "<h1>{$_('app.title', { default: 'A' })}</h1>"
        file_b = IMPORT + "<h1>{$_('app.title', { default: 'B' })}</h1>"
        accumulator = extract_messages(file_a, filename="A.svelte")
        extract_messages(file_b, accumulator, filename="B.svelte")
        assert accumulator == {"app": {"title": "A"}}

    def test_spread_catalog_entry_is_fatal(self) -> None:
        source = (
            "<script>\n"
            "  import { defineMessages } from 'svelte-i18n';\n"
            "  const messages = defineMessages({\n"
            "    ...base,\n"
            "  });\n"
            "</script>\n"
        )
        with pytest.raises(InvalidDefinitionError) as exc_info:
            extract_messages(source, filename="App.svelte")
        diagnostic = exc_info.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.message == "Found invalid 'SpreadElement' at L4:4"
        assert diagnostic.filename == "App.svelte"

    def test_numeric_argument_dropped(self) -> None:
        source = IMPORT + "<p>{$_(42)}</p>"
        assert extract_messages(source) == {}

    def test_non_literal_property_ignored(self) -> None:
        source = IMPORT + "<p>{$_({ id: 'a', default: 'x', format: handler, values: { n } })}</p>"
        records = collect_messages(parse(source))
        assert [dict(r.fields) for r in records] == [{"id": "a", "default": "x"}]

    def test_definitions_merge_before_calls(self) -> None:
        """A call earlier in the file loses to a catalog entry with the same id."""
        source = (
            "<script>\n"
            "  import { _, defineMessages } from 'svelte-i18n';\n"
            "  const title = $_('app.title', { default: 'From call' });\n"
            "  defineMessages({ title: { id: 'app.title', default: 'From catalog' } });\n"
            "</script>\n"
        )
        assert extract_messages(source, shallow=True) == {"app.title": "From catalog"}

    def test_module_script_calls_ignored(self) -> None:
        source = (
            "<script context=\"module\">\n"
            "  import { _ } from 'svelte-i18n';\n"
            "  const early = $_('module.title');\n"
            "</script>\n"
            "<p>{$_('markup.title')}</p>"
        )
        assert extract_messages(source, shallow=True) == {"markup.title": ""}

    def test_aliased_store(self) -> None:
        source = (
            "<script lang=\"ts\">\n"
            "  import { t as translate } from 'svelte-i18n';\n"
            "  let count: number = 0;\n"
            "</script>\n"
            "{#if count > 0}<p>{$translate('items.count', { default: 'Items' })}</p>{/if}"
        )
        assert extract_messages(source) == {"items": {"count": "Items"}}

    def test_library_not_imported(self) -> None:
        source = "<script>import { _ } from './i18n';</script><p>{$_('a')}</p>"
        assert extract_messages(source) == {}

    def test_null_default(self) -> None:
        source = IMPORT + "<p>{$_({ id: 'a', default: null })}</p>"
        assert extract_messages(source) == {"a": None}

    def test_head_script_does_not_abort_extraction(self) -> None:
        source = (
            "<script>import { _ } from 'svelte-i18n';</script>"
            '<svelte:head><script async src="https://example.com/gtag.js"></script></svelte:head>'
            "<h1>{$_('app.title')}</h1>"
        )
        assert extract_messages(source, shallow=True) == {"app.title": ""}


# ============================================================================
# PROPERTIES
# ============================================================================


class TestExtractionProperties:
    """Property-based tests over generated components."""

    @given(data=st.data(), entries=message_entries(message_ids()), shallow=st.booleans())
    def test_idempotence(self, data: st.DataObject, entries: list[tuple[str, str]], shallow: bool) -> None:
        """Extracting the same file twice equals extracting it once."""
        source = data.draw(component_sources(entries))
        once = extract_messages(source, shallow=shallow)
        twice = extract_messages(source, extract_messages(source, shallow=shallow), shallow=shallow)
        assert twice == once

    @given(data=st.data(), entries=message_entries(flat_ids))
    def test_first_writer_wins_across_files(
        self, data: st.DataObject, entries: list[tuple[str, str]]
    ) -> None:
        """Ids of the first file keep their values whatever the second file says."""
        file_a = data.draw(component_sources(entries))
        replaced = [(message_id, f"other {index}") for index, (message_id, _) in enumerate(entries)]
        file_b = data.draw(component_sources(replaced))

        alone = extract_messages(file_a)
        combined = extract_messages(file_b, extract_messages(file_a))
        assert combined == alone

    @given(data=st.data(), entries=message_entries(flat_ids))
    def test_shallow_deep_equivalence_on_flat_ids(
        self, data: st.DataObject, entries: list[tuple[str, str]]
    ) -> None:
        source = data.draw(component_sources(entries))
        assert extract_messages(source, shallow=True) == extract_messages(source, shallow=False)

    @given(entries=message_entries(flat_ids))
    def test_every_id_extracted(self, entries: list[tuple[str, str]]) -> None:
        source = IMPORT + "\n".join(f"<p>{{$_('{message_id}')}}</p>" for message_id, _ in entries)
        assert set(extract_messages(source)) == {message_id for message_id, _ in entries}
