"""Tests for the exception hierarchy."""

import pytest

from lexdialogue.exceptions import (
    ConfigurationError,
    DialogueFileNotFoundError,
    EmptyDialogueError,
    ExportError,
    LexDialogueError,
    PlaybackError,
)


class TestLexDialogueError:
    """Test the structured base error."""

    def test_message_only(self):
        error = LexDialogueError("Something broke")

        assert str(error) == "Error: Something broke"
        assert error.hint is None
        assert error.details == {}

    def test_hint_and_details(self):
        error = LexDialogueError(
            "Something broke",
            hint="Try again",
            details={"path": "story.lex", "line": 3},
        )

        assert str(error) == (
            "Error: Something broke\n"
            "Hint: Try again\n"
            "Details:\n"
            "  path: story.lex\n"
            "  line: 3"
        )

    def test_to_dict(self):
        error = ExportError("Unsupported format: xml", hint="Use one of: json")

        assert error.to_dict() == {
            "type": "ExportError",
            "message": "Unsupported format: xml",
            "hint": "Use one of: json",
            "details": {},
        }

    @pytest.mark.parametrize(
        "error_class",
        [
            ConfigurationError,
            PlaybackError,
            EmptyDialogueError,
            ExportError,
            DialogueFileNotFoundError,
        ],
    )
    def test_subclasses_share_base(self, error_class):
        assert issubclass(error_class, LexDialogueError)

    def test_empty_dialogue_is_playback_error(self):
        with pytest.raises(PlaybackError):
            raise EmptyDialogueError("No steps found in first section")
