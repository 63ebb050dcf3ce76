"""Tests for the playback engine."""

from unittest.mock import patch

import pytest

from lexdialogue.exceptions import EmptyDialogueError
from lexdialogue.parser import parse
from lexdialogue.parser.models import (
    Dialogue,
    NumberValue,
    Page,
    TextLine,
    TextValue,
)
from lexdialogue.player import (
    COMPLETED_MESSAGE,
    BufferedSink,
    DialoguePlayer,
    PlaybackPosition,
    PlaybackStatus,
    play,
)


def run_script(text: str) -> tuple[DialoguePlayer, BufferedSink]:
    """Parse and play ``text`` to completion with a buffered sink."""
    sink = BufferedSink()
    player = DialoguePlayer(parse(text).dialogue, sink=sink)
    player.run()
    return player, sink


class TestStartPreconditions:
    """The player refuses to start without a first step."""

    def test_no_sections(self):
        with pytest.raises(EmptyDialogueError, match="No sections"):
            DialoguePlayer(Dialogue(), sink=BufferedSink())

    def test_empty_first_section(self):
        with pytest.raises(EmptyDialogueError) as exc_info:
            DialoguePlayer(parse("").dialogue, sink=BufferedSink())

        assert exc_info.value.details == {"section": "Meta"}

    def test_starts_at_first_step(self):
        player = DialoguePlayer(parse("Hello").dialogue, sink=BufferedSink())

        assert player.position == PlaybackPosition(0, 0)
        assert player.status is PlaybackStatus.READY


class TestStepRendering:
    """Test the output produced by each step kind."""

    def test_page_rows_are_emitted_as_one_turn(self):
        _, sink = run_script(
            "@Oscar\nname: Oscar Cooke-Abbott\n\n"
            "@oscar: Hello\nNarrator: Hi\nPlain text\n- Choice"
        )

        assert sink.stdout[0] == (
            "Oscar Cooke-Abbott: Hello\nNarrator: Hi\nPlain text\n- Choice"
        )

    def test_unknown_speaker_renders_raw_id(self):
        _, sink = run_script("@ghost: Boo")

        assert sink.stdout[0] == "ghost: Boo"

    def test_logs_go_to_their_streams(self):
        _, sink = run_script("/// info\n//? careful\n//! broken\n// hidden")

        assert sink.stdout == ["info", "careful", COMPLETED_MESSAGE]
        assert sink.stderr == ["broken"]

    def test_comment_has_no_output(self):
        _, sink = run_script("// nothing to see")

        assert sink.records == [("stdout", COMPLETED_MESSAGE)]


class TestVariables:
    """Test the working variable table."""

    def test_assignment_replaces_value(self):
        player, sink = run_script("$gold: 10\n$gold = [a, b]\n$gold = rich")

        assert player.variables["gold"] == TextValue("rich")
        assert sink.stderr == []

    def test_parsed_document_is_not_modified(self):
        dialogue = parse("$gold: 10\n$gold = 20").dialogue
        player = DialoguePlayer(dialogue, sink=BufferedSink())
        player.run()

        assert player.variables["gold"] == NumberValue(20.0)
        assert dialogue.variables["gold"] == NumberValue(10.0)

    def test_undeclared_assignment_warns_and_assigns(self):
        player, sink = run_script("$fresh = 1")

        assert player.variables == {"fresh": NumberValue(1.0)}
        assert sink.stderr == ["Variable assignment not pre-existing: fresh"]


class TestFallThrough:
    """Test default advancement through sections."""

    def test_sections_play_in_document_order(self):
        _, sink = run_script("#Intro\nHello\n\nAgain\n#Outro\nGoodbye")

        assert sink.stdout == ["Hello", "Again", "Goodbye", COMPLETED_MESSAGE]

    def test_trailing_empty_section_is_skipped(self):
        player, sink = run_script("#Intro\nHello\n#Empty")

        assert sink.stdout == ["Hello", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.ENDED

    def test_tick_reports_remaining_state(self):
        player = DialoguePlayer(parse("One\n\nTwo").dialogue, sink=BufferedSink())

        assert player.tick() is True
        assert player.position == PlaybackPosition(0, 1)
        assert player.tick() is False
        assert player.finished
        assert player.tick() is False


class TestJumps:
    """Test permanent redirects."""

    def test_jump_skips_ahead(self):
        _, sink = run_script("#A\nStart\n=> C\n#B\nSkipped\n#C\nLanded")

        assert sink.stdout == ["Start", "Landed", COMPLETED_MESSAGE]

    def test_jump_backwards_then_end(self):
        script = "#A\nIn A\n=> C\n#B\nIn B\n=> end\n#C\nIn C\n=> B"
        _, sink = run_script(script)

        assert sink.stdout == ["In A", "In C", "In B", COMPLETED_MESSAGE]

    def test_jump_target_is_case_sensitive(self):
        _, sink = run_script("#Intro\n=> outro\nNot reached\n#Outro\nNot reached")

        assert sink.stderr == ["Section not found: outro"]
        assert sink.stdout == [COMPLETED_MESSAGE]

    def test_unresolved_jump_ends_the_branch(self):
        player, sink = run_script("#Intro\n=> Nowhere\nAfter")

        assert sink.stderr == ["Section not found: Nowhere"]
        assert "After" not in sink.stdout
        assert player.status is PlaybackStatus.ENDED

    def test_unresolved_jump_inside_bounce_returns(self):
        script = "#Main\n=><= Side\nBack\n=> end\n#Side\n=> Nowhere\nSkipped"
        _, sink = run_script(script)

        assert sink.stderr == ["Section not found: Nowhere"]
        assert sink.stdout == ["Back", COMPLETED_MESSAGE]


class TestBounces:
    """Test call-and-return navigation."""

    def test_bounce_returns_when_target_is_exhausted(self):
        script = "#Main\nBefore\n=><= Side\nAfter\n=> end\n#Side\nInside"
        _, sink = run_script(script)

        assert sink.stdout == ["Before", "Inside", "After", COMPLETED_MESSAGE]

    def test_end_inside_bounce_returns(self):
        script = "#Main\n=><= Side\nAfter\n=> end\n#Side\nInside\n=> end\nSkipped"
        _, sink = run_script(script)

        assert sink.stdout == ["Inside", "After", COMPLETED_MESSAGE]

    def test_nested_bounces_unwind_in_order(self):
        script = (
            "#Main\n=><= A\nMain done\n=> end\n"
            "#A\nA start\n=><= B\nA done\n=> end\n"
            "#B\nB only\n=> end"
        )
        _, sink = run_script(script)

        assert sink.stdout == [
            "A start",
            "B only",
            "A done",
            "Main done",
            COMPLETED_MESSAGE,
        ]

    def test_return_survives_intervening_jump(self):
        script = (
            "#Main\n=><= A\nBack in main\n=> end\n"
            "#A\nIn A\n=> B\n"
            "#B\nIn B"
        )
        _, sink = run_script(script)

        assert sink.stdout == ["In A", "In B", "Back in main", COMPLETED_MESSAGE]

    def test_bounce_as_last_step_continues_with_next_section(self):
        script = "#Main\n=><= Side\n#Next\nNext section\n=> end\n#Side\nInside"
        _, sink = run_script(script)

        assert sink.stdout == ["Inside", "Next section", COMPLETED_MESSAGE]

    def test_bounce_at_end_of_document_ends_after_return(self):
        script = (
            "#Main\nHello\n=> Last\n"
            "#Sub\nIn sub\n"
            "#Last\nLast line\n=><= Sub"
        )
        player, sink = run_script(script)

        assert sink.stdout == ["Hello", "Last line", "In sub", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.ENDED

    def test_bounce_at_end_of_document_pushes_end_marker(self):
        player = DialoguePlayer(
            parse("#Sub\nIn sub\n#Last\n=><= Sub").dialogue,
            sink=BufferedSink(),
        )
        player.tick()
        player.tick()

        assert player.return_stack == [None]
        assert player.position == PlaybackPosition(0, 0)

    def test_terminate_inside_bounce_ends_session(self):
        script = "#Main\n=><= Side\nNever\n#Side\nInside\n=> terminate"
        player, sink = run_script(script)

        assert sink.stdout == ["Inside", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.TERMINATED
        assert player.return_stack == []

    def test_unresolved_bounce_falls_through(self):
        player, sink = run_script("#Main\n=><= Missing\nStill here")

        assert sink.stderr == ["Section not found: Missing"]
        assert sink.stdout == ["Still here", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.ENDED

    def test_bounce_into_empty_section_is_unresolved(self):
        _, sink = run_script("#Main\n=><= Empty\nAfter\n#Empty")

        assert sink.stderr == ["Section has no steps: Empty"]
        assert sink.stdout == ["After", COMPLETED_MESSAGE]

    def test_bounce_pushes_resume_point(self):
        player = DialoguePlayer(
            parse("#Main\n=><= Side\nAfter\n#Side\nInside").dialogue,
            sink=BufferedSink(),
        )

        player.tick()

        assert player.return_stack == [PlaybackPosition(0, 1)]
        assert player.position == PlaybackPosition(1, 0)


class TestEndAndTerminate:
    """Test graceful end and immediate termination."""

    def test_end_without_bounce_ends_session(self):
        player, sink = run_script("First\n=> end\nNever")

        assert sink.stdout == ["First", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.ENDED

    def test_terminate_ends_session(self):
        player, sink = run_script("First\n=> terminate\nNever")

        assert sink.stdout == ["First", COMPLETED_MESSAGE]
        assert player.status is PlaybackStatus.TERMINATED


class TestSampleScript:
    """Play the shared sample script end to end."""

    def test_full_session(self, sample_script):
        player, sink = run_script(sample_script)

        assert sink.stdout == [
            "Session started",
            "Oscar Cooke-Abbott: Hello there.\n"
            "Narrator: The room is quiet.\n"
            "- Say hello\n"
            "- Leave",
            "An aside, then back.",
            "Oscar Cooke-Abbott: Where was I?",
            "Goodbye.",
            COMPLETED_MESSAGE,
        ]
        assert sink.stderr == []
        assert player.variables["visits"] == NumberValue(1.0)


class TestPlayFunction:
    """Test the module-level convenience wrapper."""

    def test_play_returns_none(self):
        sink = BufferedSink()

        assert play(parse("Hi").dialogue, sink=sink) is None
        assert sink.stdout == ["Hi", COMPLETED_MESSAGE]

    def test_delay_sleeps_between_ticks(self):
        with patch("lexdialogue.player.engine.time.sleep") as mock_sleep:
            play(
                parse("One\n\nTwo\n\nThree").dialogue,
                sink=BufferedSink(),
                delay=0.25,
            )

        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.25)

    def test_no_sleep_without_delay(self):
        with patch("lexdialogue.player.engine.time.sleep") as mock_sleep:
            play(parse("One\n\nTwo").dialogue, sink=BufferedSink())

        mock_sleep.assert_not_called()

    def test_page_model_renders_directly(self):
        player = DialoguePlayer(parse("x").dialogue, sink=BufferedSink())

        assert player.render_page(Page([TextLine("a"), TextLine("b")])) == "a\nb"
