"""Tests for inserting, locating, and re-reading insights in note text."""

from messages_from_today.models import Insight
from messages_from_today.services.note_formatter import (
    MESSAGES_HEADER,
    format_insights,
    insert_insights,
    parse_insights,
    parse_selected_message,
)


class TestFormatInsights:

    def test_two_lines_per_insight(self):
        text = format_insights([Insight("M1", "D1"), Insight("M2", "")])
        assert text == "- M1\n\t- D1\n- M2\n\t- "


class TestInsertInsights:

    def test_appends_heading_when_absent(self):
        note = "Had a great walk today."
        result = insert_insights(
            note, [Insight("Walking clears the mind", "Noted after today's walk")]
        )
        assert result == (
            "Had a great walk today."
            "\n\n### Messages from Today\n- Walking clears the mind\n\t- Noted after today's walk"
        )

    def test_trailing_whitespace_trimmed_before_heading(self):
        note = "# Day\n\nSome text.\n\n\n  "
        result = insert_insights(note, [Insight("M", "D")])
        assert result.startswith("# Day\n\nSome text.\n\n" + MESSAGES_HEADER)

    def test_inserts_before_following_heading(self):
        note = (
            "# Day\n"
            f"{MESSAGES_HEADER}\n"
            "- Old\n\t- Old desc\n\n"
            "## Tasks\n- [ ] laundry\n"
        )
        result = insert_insights(note, [Insight("New", "New desc")])
        assert result == (
            "# Day\n"
            f"{MESSAGES_HEADER}\n"
            "- Old\n\t- Old desc\n"
            "- New\n\t- New desc\n"
            "\n## Tasks\n- [ ] laundry\n"
        )

    def test_level_four_heading_is_not_a_section_boundary(self):
        note = f"{MESSAGES_HEADER}\n- Old\n\t- od\n#### Detail\n"
        result = insert_insights(note, [Insight("New", "nd")])
        # No level 1-3 heading follows, so new insights go right after the heading.
        assert result == f"{MESSAGES_HEADER}\n- New\n\t- nd\n\n- Old\n\t- od\n#### Detail"

    def test_inserts_after_heading_when_section_is_last(self):
        note = f"Journal\n\n{MESSAGES_HEADER}\n- Old\n\t- od\n\n\n"
        result = insert_insights(note, [Insight("New", "nd")])
        assert result == f"Journal\n\n{MESSAGES_HEADER}\n- New\n\t- nd\n\n- Old\n\t- od"

    def test_repeated_inserts_accumulate(self):
        note = "Today was busy."
        once = insert_insights(note, [Insight("A", "a")])
        twice = insert_insights(once, [Insight("B", "b")])
        assert twice.count(MESSAGES_HEADER) == 1
        assert set(parse_insights(twice)) == {Insight("A", "a"), Insight("B", "b")}

    def test_same_insight_twice_is_not_deduplicated(self):
        note = insert_insights("x", [Insight("A", "a")])
        note = insert_insights(note, [Insight("A", "a")])
        assert parse_insights(note) == [Insight("A", "a"), Insight("A", "a")]


class TestParseInsights:

    def test_round_trip_on_empty_note(self):
        text = insert_insights("", [Insight("M1", "D1")])
        assert parse_insights(text) == [Insight("M1", "D1")]

    def test_no_heading_returns_empty(self):
        assert parse_insights("- not\n\t- under heading") == []

    def test_stops_at_next_heading(self):
        note = (
            f"{MESSAGES_HEADER}\n- M1\n\t- D1\n"
            "## Other\n- Not a message\n\t- nope\n"
        )
        assert parse_insights(note) == [Insight("M1", "D1")]

    def test_first_indented_bullet_wins(self):
        note = f"{MESSAGES_HEADER}\n- M1\n\t- first\n\t- second\n    - third\n"
        assert parse_insights(note) == [Insight("M1", "first")]

    def test_space_indented_descriptions(self):
        note = f"{MESSAGES_HEADER}\n- M1\n  - two spaces\n- M2\n    - four spaces\n"
        assert parse_insights(note) == [
            Insight("M1", "two spaces"),
            Insight("M2", "four spaces"),
        ]

    def test_message_without_description(self):
        note = f"{MESSAGES_HEADER}\n- M1\n- M2\n\t- D2"
        assert parse_insights(note) == [Insight("M1", ""), Insight("M2", "D2")]

    def test_prose_lines_are_ignored(self):
        note = f"{MESSAGES_HEADER}\nSome intro text\n- M1\nstray line\n\t- D1\n"
        assert parse_insights(note) == [Insight("M1", "D1")]

    def test_single_space_indent_is_not_a_description(self):
        note = f"{MESSAGES_HEADER}\n- M1\n - nope\n"
        assert parse_insights(note) == [Insight("M1", "")]

    def test_empty_description_round_trips(self):
        text = insert_insights("note", [Insight("M1", "")])
        assert parse_insights(text) == [Insight("M1", "")]


class TestParseSelectedMessage:

    def test_message_and_tab_description(self):
        assert parse_selected_message("- Walk more\n\t- Fresh air helps") == Insight(
            "Walk more", "Fresh air helps"
        )

    def test_only_first_pair_is_used(self):
        selection = "- First\n\t- first desc\n- Second\n\t- second desc"
        assert parse_selected_message(selection) == Insight("First", "first desc")

    def test_message_only(self):
        assert parse_selected_message("- Just this") == Insight("Just this", "")

    def test_plain_lines_without_bullets(self):
        assert parse_selected_message("Plain message\nplain description") == Insight(
            "Plain message", "plain description"
        )

    def test_plain_message_with_dashed_second_line(self):
        assert parse_selected_message("Plain message\n-dashed desc") == Insight(
            "Plain message", "dashed desc"
        )

    def test_blank_selection(self):
        assert parse_selected_message("  \n\t\n") is None
