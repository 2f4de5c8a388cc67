"""
Property-based tests for the REPL completer.

**Feature: repl-input, Property 2: Completion vocabulary**
"""

from hypothesis import given, settings
from hypothesis import strategies as st
from prompt_toolkit.completion import CompleteEvent
from prompt_toolkit.document import Document

from chatshell.cli.commands import REPL_COMMANDS
from chatshell.cli.repl.completer import ReplCompleter

word = st.text(
    alphabet=st.sampled_from("abcdefgh.-_"),
    min_size=1,
    max_size=8,
)

word_list = st.lists(word, max_size=15)


@given(commands=word_list, extras=word_list)
@settings(max_examples=100)
def test_vocabulary_is_deduplicated_union(commands: list[str], extras: list[str]):
    """
    **Feature: repl-input, Property 2: Completion vocabulary**

    The vocabulary is the deduplicated union of commands and extra
    completions, in insertion order, without entries shorter than 2.
    """
    completer = ReplCompleter(commands, extras)
    vocabulary = completer.vocabulary

    assert len(vocabulary) == len(set(vocabulary))
    assert set(vocabulary) == {w for w in commands + extras if len(w) >= 2}

    expected_order = []
    for w in commands + extras:
        if len(w) >= 2 and w not in expected_order:
            expected_order.append(w)
    assert list(vocabulary) == expected_order


@given(commands=word_list, extras=word_list, prefix=word)
@settings(max_examples=100)
def test_matches_are_prefix_filtered_vocabulary(commands: list[str], extras: list[str], prefix: str):
    """
    **Feature: repl-input, Property 2: Completion vocabulary**

    Completion returns, in vocabulary order, exactly the entries that start
    with the word under the cursor; short entries never appear.
    """
    completer = ReplCompleter(commands, extras)
    buffer = f"say {prefix}"
    matches = completer.complete(buffer, len(buffer))

    assert matches == [w for w in completer.vocabulary if w.startswith(prefix)]
    assert all(len(m) >= 2 for m in matches)


class TestCompleterExamples:
    """Concrete completion examples."""

    def setup_method(self):
        self.completer = ReplCompleter(REPL_COMMANDS.names(), ["coder", "gpt-4", "x", ".role"])

    def test_command_prefix(self):
        assert self.completer.complete(".co", 3) == [".conversation", ".copy"]

    def test_clear_variants_in_table_order(self):
        assert self.completer.complete(".clear", 6) == [
            ".clear role",
            ".clear conversation",
            ".clear screen",
        ]

    def test_dynamic_completion_after_command(self):
        buffer = ".role co"
        assert self.completer.complete(buffer, len(buffer)) == ["coder"]

    def test_inclusion_characters_are_part_of_word(self):
        assert self.completer.current_word(".model gpt-", 11) == "gpt-"
        assert self.completer.complete(".model gpt-", 11) == ["gpt-4"]

    def test_word_stops_at_whitespace_and_braces(self):
        assert self.completer.current_word(".prompt {ab", 11) == "ab"

    def test_short_entries_are_excluded(self):
        assert "x" not in self.completer.vocabulary
        assert self.completer.complete("x", 1) == []

    def test_duplicates_from_config_are_dropped(self):
        assert self.completer.vocabulary.count(".role") == 1

    def test_empty_word_has_no_candidates(self):
        assert self.completer.complete("", 0) == []
        assert self.completer.complete(".role ", 6) == []

    def test_no_match_is_empty_list(self):
        assert self.completer.complete(".zzz", 4) == []

    def test_cursor_in_middle_of_buffer(self):
        buffer = ".he tail"
        assert self.completer.complete(buffer, 3) == [".help"]

    def test_get_completions_replaces_current_word(self):
        document = Document(".role co", cursor_position=8)
        completions = list(self.completer.get_completions(document, CompleteEvent()))

        assert [c.text for c in completions] == ["coder"]
        assert completions[0].start_position == -2
