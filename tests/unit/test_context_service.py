"""Tests for context assembly."""

import re
import threading
import time

import pytest

from mastermind.adapters.outbound.memory_store import InMemoryDocumentStore
from mastermind.core.domain import BlockLabel, ContextBlock, Document
from mastermind.core.domain.exceptions import OperationCancelledError
from mastermind.core.services.context_service import NO_CONTEXT_FOUND, ContextAssembler

pytestmark = pytest.mark.unit

HEADER = re.compile(r"^--- (ACTIVE FILE|RELEVANT FILE): (.+) ---$", re.MULTILINE)


def headers(context):
    return HEADER.findall(context)


def numbered_notes(count, content="shared text"):
    return {f"note{i:02d}.md": content for i in range(count)}


class TestBlockRendering:
    def test_block_format(self):
        block = ContextBlock(BlockLabel.RELEVANT, "A.md", "body")
        assert block.render() == "--- RELEVANT FILE: A.md ---\nbody\n\n"

    def test_no_blocks_renders_sentinel(self):
        assert ContextAssembler.render_blocks([]) == NO_CONTEXT_FOUND
        assert NO_CONTEXT_FOUND == "No immediate relevant context found. Mastermind may need to search the vault."


class TestAssemble:
    def test_content_matches_in_enumeration_order(self):
        store = InMemoryDocumentStore({"A.md": "the quick fox", "B.md": "fox jumps"})
        assembler = ContextAssembler(store)

        assert assembler.assemble("fox") == (
            "--- RELEVANT FILE: A.md ---\nthe quick fox...\n\n"
            "--- RELEVANT FILE: B.md ---\nfox jumps...\n\n"
        )

    def test_nothing_relevant_returns_sentinel(self, memory_store):
        assembler = ContextAssembler(memory_store)

        assert assembler.assemble("zebra") == NO_CONTEXT_FOUND

    def test_empty_vault_returns_sentinel(self):
        assert ContextAssembler(InMemoryDocumentStore()).assemble("fox") == NO_CONTEXT_FOUND

    def test_query_matching_is_case_insensitive(self):
        store = InMemoryDocumentStore({"A.md": "The Quick FOX"})

        assert headers(ContextAssembler(store).assemble("fOx")) == [("RELEVANT FILE", "A.md")]

    def test_active_note_first_and_in_full(self):
        long_body = "unrelated " * 1000
        store = InMemoryDocumentStore({"A.md": "the quick fox", "C.md": long_body})
        assembler = ContextAssembler(store)

        context = assembler.assemble("fox", active=Document("C.md"))

        assert context.startswith(f"--- ACTIVE FILE: C.md ---\n{long_body}\n\n")
        assert headers(context) == [("ACTIVE FILE", "C.md"), ("RELEVANT FILE", "A.md")]

    def test_active_note_included_when_nothing_else_matches(self):
        store = InMemoryDocumentStore({"C.md": "unrelated"})

        context = ContextAssembler(store).assemble("fox", active=Document("C.md"))

        assert context == "--- ACTIVE FILE: C.md ---\nunrelated\n\n"

    def test_active_note_never_duplicated(self):
        store = InMemoryDocumentStore({"A.md": "the quick fox", "B.md": "fox jumps"})

        context = ContextAssembler(store).assemble("fox", active=Document("A.md"))

        assert headers(context) == [("ACTIVE FILE", "A.md"), ("RELEVANT FILE", "B.md")]

    def test_empty_query_takes_first_five_in_order(self):
        store = InMemoryDocumentStore(numbered_notes(8))

        context = ContextAssembler(store).assemble("")

        assert [path for _, path in headers(context)] == [f"note{i:02d}.md" for i in range(5)]

    def test_active_note_in_top_five_leaves_four_relevant(self):
        store = InMemoryDocumentStore(numbered_notes(8))

        context = ContextAssembler(store).assemble("", active=Document("note02.md"))

        assert headers(context) == [
            ("ACTIVE FILE", "note02.md"),
            ("RELEVANT FILE", "note00.md"),
            ("RELEVANT FILE", "note01.md"),
            ("RELEVANT FILE", "note03.md"),
            ("RELEVANT FILE", "note04.md"),
        ]

    def test_at_most_five_relevant_blocks(self):
        store = InMemoryDocumentStore(numbered_notes(12, content="fox"))

        context = ContextAssembler(store).assemble("fox")

        assert len(headers(context)) == 5

    def test_higher_scores_rank_first(self):
        store = InMemoryDocumentStore(
            {
                "misc.md": "a fox",
                "animals/fox.md": "a fox",
                "zoo/foxes.md": "nothing",
            }
        )

        context = ContextAssembler(store).assemble("fox")

        # 35, 20, 15
        assert [path for _, path in headers(context)] == ["animals/fox.md", "misc.md", "zoo/foxes.md"]

    def test_path_only_match_is_below_threshold(self):
        store = InMemoryDocumentStore({"fox/notes.md": "nothing"})

        assert ContextAssembler(store).assemble("fox") == NO_CONTEXT_FOUND

    def test_threshold_is_configurable(self):
        store = InMemoryDocumentStore({"fox/notes.md": "nothing"})

        context = ContextAssembler(store, min_score=4).assemble("fox")

        assert headers(context) == [("RELEVANT FILE", "fox/notes.md")]

    def test_relevant_content_truncated_with_marker(self):
        store = InMemoryDocumentStore({"long.md": "fox" + "y" * 2997})

        context = ContextAssembler(store).assemble("fox")
        body = context.split("\n", 1)[1][: -len("\n\n")]

        assert body == ("fox" + "y" * 2997)[:2000] + "..."

    def test_marker_appended_to_short_content(self):
        store = InMemoryDocumentStore({"a.md": "fox"})

        assert ContextAssembler(store).assemble("fox") == "--- RELEVANT FILE: a.md ---\nfox...\n\n"

    def test_explicit_documents_restrict_the_scan(self):
        store = InMemoryDocumentStore({"A.md": "fox", "B.md": "fox"})

        context = ContextAssembler(store).assemble("fox", documents=[Document("B.md")])

        assert headers(context) == [("RELEVANT FILE", "B.md")]


class TestFailures:
    def test_unreadable_note_does_not_abort(self, flaky_store):
        store = flaky_store({"A.md": "fox", "B.md": "fox"}, failing={"A.md"})

        context = ContextAssembler(store).assemble("fox")

        assert headers(context) == [("RELEVANT FILE", "B.md")]

    def test_every_note_failing_returns_sentinel(self, flaky_store):
        store = flaky_store({"A.md": "fox", "B.md": "fox"}, failing={"A.md", "B.md"})

        assert ContextAssembler(store).assemble("fox") == NO_CONTEXT_FOUND

    def test_note_deleted_during_scan_scores_zero(self):
        store = InMemoryDocumentStore({"A.md": "fox"})
        documents = [Document("gone.md"), Document("A.md")]

        context = ContextAssembler(store).assemble("fox", documents=documents)

        assert headers(context) == [("RELEVANT FILE", "A.md")]

    def test_unreadable_active_note_is_omitted(self, flaky_store):
        store = flaky_store({"A.md": "fox", "C.md": "notes"}, failing={"C.md"})

        context = ContextAssembler(store).assemble("fox", active=Document("C.md"))

        assert headers(context) == [("RELEVANT FILE", "A.md")]

    def test_cancelled_scan_raises(self, memory_store):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(OperationCancelledError):
            ContextAssembler(memory_store).assemble("fox", cancel_event=cancel)

    @pytest.mark.slow
    def test_slow_read_is_abandoned(self, flaky_store):
        store = flaky_store({"A.md": "fox", "B.md": "fox"}, slow={"A.md": 0.6})

        context = ContextAssembler(store, read_timeout=0.1).assemble("fox")

        assert headers(context) == [("RELEVANT FILE", "B.md")]

    @pytest.mark.slow
    def test_slow_active_note_is_abandoned(self, flaky_store):
        store = flaky_store({"A.md": "fox", "C.md": "notes"}, slow={"C.md": 1.0})

        start = time.monotonic()
        context = ContextAssembler(store, read_timeout=0.1).assemble("fox", active=Document("C.md"))

        assert headers(context) == [("RELEVANT FILE", "A.md")]
        assert time.monotonic() - start < 0.9

    @pytest.mark.slow
    def test_every_read_hanging_still_returns(self, flaky_store):
        notes = numbered_notes(6, content="fox")
        store = flaky_store(notes, hang=set(notes))
        assembler = ContextAssembler(store, max_workers=2, read_timeout=0.1)
        outcome = {}

        worker = threading.Thread(target=lambda: outcome.update(context=assembler.assemble("fox")))
        try:
            worker.start()
            worker.join(5)
            assert not worker.is_alive()
        finally:
            store.release.set()

        assert outcome["context"] == NO_CONTEXT_FOUND


def test_collect_blocks_returns_labels_and_paths(memory_store):
    assembler = ContextAssembler(memory_store)

    blocks = assembler.collect_blocks("fox", active=Document("recipes/bread.md"))

    assert [(block.label, block.path) for block in blocks] == [
        (BlockLabel.ACTIVE, "recipes/bread.md"),
        (BlockLabel.RELEVANT, "A.md"),
        (BlockLabel.RELEVANT, "B.md"),
    ]
    assert blocks[0].content == "Flour, water, salt. Knead for ten minutes."
