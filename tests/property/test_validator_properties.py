"""
Property-based tests for the REPL input validator.

**Feature: repl-input, Property 1: Quote parity and brace balance**
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from chatshell.cli.commands import REPL_COMMANDS
from chatshell.cli.repl.validator import ReplValidator, ValidationResult, incomplete_brackets

TRIGGERS = REPL_COMMANDS.multiline_triggers()

validator = ReplValidator(TRIGGERS)

# Arbitrary input text, including quotes, braces and newlines
any_text = st.text(
    alphabet=st.sampled_from('abc xyz.{}"\n\t'),
    max_size=60,
)

trigger_word = st.sampled_from(sorted(TRIGGERS))

# Text that never starts with a trigger (triggers all begin with ".")
non_trigger_text = any_text.filter(lambda s: not s.lstrip().startswith("."))

brace_body = st.text(alphabet=st.sampled_from("ab {}\n"), max_size=40)


def _unmatched_open_braces(text: str) -> int:
    """Reference count of `{` left open, ignoring stray `}`."""
    depth = 0
    for char in text:
        if char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
    return depth


@given(text=any_text)
@settings(max_examples=200)
def test_odd_quote_count_is_incomplete(text: str):
    """
    **Feature: repl-input, Property 1: Quote parity and brace balance**

    Any buffer with an odd number of double quotes is incomplete, whatever
    its command or brace content.
    """
    if text.count('"') % 2 == 0:
        text += '"'

    assert validator.validate(text) is ValidationResult.INCOMPLETE


@given(prefix=trigger_word, body=any_text)
@settings(max_examples=200)
def test_odd_quote_count_with_trigger_is_incomplete(prefix: str, body: str):
    text = f"{prefix} {body}"
    if text.count('"') % 2 == 0:
        text += '"'

    assert validator.validate(text) is ValidationResult.INCOMPLETE


@given(text=non_trigger_text)
@settings(max_examples=200)
def test_non_trigger_input_ignores_braces(text: str):
    """
    **Feature: repl-input, Property 1: Quote parity and brace balance**

    Input that does not start with a trigger word is complete whenever its
    quote count is even, regardless of braces.
    """
    if text.count('"') % 2 == 1:
        text += '"'

    assert validator.validate(text) is ValidationResult.COMPLETE


@given(prefix=trigger_word, body=brace_body, indent=st.sampled_from(["", " ", "  \t"]))
@settings(max_examples=200)
def test_trigger_input_follows_brace_balance(prefix: str, body: str, indent: str):
    """
    **Feature: repl-input, Property 1: Quote parity and brace balance**

    For triggering input without quotes, the buffer is incomplete exactly
    when a `{` is left open.
    """
    text = f"{indent}{prefix} {body}"
    expected_open = _unmatched_open_braces(text) > 0

    assert incomplete_brackets(text, TRIGGERS) is expected_open
    expected = ValidationResult.INCOMPLETE if expected_open else ValidationResult.COMPLETE
    assert validator.validate(text) is expected


class TestValidatorExamples:
    """Concrete examples of the validator's behaviour."""

    def test_empty_buffer_is_complete(self):
        assert validator.validate("") is ValidationResult.COMPLETE

    def test_whitespace_buffer_is_complete(self):
        assert validator.validate("   \n ") is ValidationResult.COMPLETE

    def test_one_unmatched_brace_is_incomplete(self):
        assert validator.validate(".prompt {foo {bar}") is ValidationResult.INCOMPLETE

    def test_nested_braces_closed_is_complete(self):
        assert validator.validate(".prompt {foo {bar}}") is ValidationResult.COMPLETE

    def test_multiline_buffer_closed_on_later_line(self):
        assert validator.validate(".prompt {\nline one\n}") is ValidationResult.COMPLETE

    def test_leading_whitespace_before_trigger(self):
        assert validator.validate("   .prompt {") is ValidationResult.INCOMPLETE

    def test_stray_close_brace_is_ignored(self):
        assert validator.validate(".prompt } {") is ValidationResult.INCOMPLETE
        assert validator.validate(".prompt }}") is ValidationResult.COMPLETE

    def test_non_trigger_open_brace_is_complete(self):
        assert validator.validate(".role {") is ValidationResult.COMPLETE
        assert validator.validate("hello {") is ValidationResult.COMPLETE

    def test_unterminated_quote_without_trigger(self):
        assert validator.validate('say "hello') is ValidationResult.INCOMPLETE

    def test_braces_inside_quotes_still_count(self):
        # Heuristic: quoted braces are not excluded from the balance
        assert validator.validate('.prompt "{"') is ValidationResult.INCOMPLETE

    def test_is_complete_helper(self):
        assert validator.is_complete(".prompt {}")
        assert not validator.is_complete(".edit {")

    def test_validator_without_triggers(self):
        plain = ReplValidator([])
        assert plain.validate(".prompt {") is ValidationResult.COMPLETE
