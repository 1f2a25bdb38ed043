"""
Note Formatter - reads and writes the "Messages from Today" section of a
daily note.

Insights are rendered as a two-level bullet list under a fixed heading:

    ### Messages from Today
    - <message>
    	- <description>

New batches are added to the existing section (never replacing earlier
ones), and the section can be parsed back into ``Insight`` objects.
"""

import re

from messages_from_today.models import Insight

MESSAGES_HEADER = "### Messages from Today"

# Start of the next level 1-3 heading
_NEXT_SECTION_RE = re.compile(r"\n(#{1,3}\s)")
# Indented bullet: a tab or 2+ spaces before the dash
_DESCRIPTION_RE = re.compile(r"^(?:\t| {2,})\s*-(?:\s+(.*))?$")
_SELECTION_LINE_RE = re.compile(r"^[\t ]*-?\s*(.+)$")


def format_insights(insights: list[Insight]) -> str:
    lines = []
    for insight in insights:
        lines.append(f"- {insight.message}")
        lines.append(f"\t- {insight.description}")
    return "\n".join(lines)


def insert_insights(note_text: str, insights: list[Insight]) -> str:
    """Return ``note_text`` with ``insights`` added under the messages heading."""
    formatted = format_insights(insights)
    header_index = note_text.find(MESSAGES_HEADER)

    if header_index == -1:
        return note_text.rstrip() + "\n\n" + MESSAGES_HEADER + "\n" + formatted

    split_at = header_index + len(MESSAGES_HEADER)
    before_header = note_text[:split_at]
    after_header = note_text[split_at:]

    next_section = _NEXT_SECTION_RE.search(after_header)
    if next_section:
        existing = after_header[: next_section.start()]
        remaining = after_header[next_section.start():]
        return before_header + existing.rstrip() + "\n" + formatted + "\n" + remaining

    return before_header + "\n" + formatted + "\n" + after_header.rstrip()


def _messages_section(note_text: str) -> str | None:
    header_index = note_text.find(MESSAGES_HEADER)
    if header_index == -1:
        return None
    section = note_text[header_index + len(MESSAGES_HEADER):]
    next_section = _NEXT_SECTION_RE.search(section)
    if next_section:
        section = section[: next_section.start()]
    return section


def parse_insights(note_text: str) -> list[Insight]:
    """Parse previously inserted insights back out of a note, in document order."""
    section = _messages_section(note_text)
    if section is None:
        return []

    insights: list[Insight] = []
    message: str | None = None
    description: str | None = None

    def flush() -> None:
        if message:
            insights.append(Insight(message=message, description=description or ""))

    for line in section.split("\n"):
        if line.startswith("- ") or line == "-":
            flush()
            message = line[2:].strip()
            description = None
            continue
        match = _DESCRIPTION_RE.match(line)
        if match and message is not None and description is None:
            description = (match.group(1) or "").strip()

    flush()
    return insights


def parse_selected_message(selection: str) -> Insight | None:
    """
    Leniently read a message (and optional description) from a text
    fragment the user selected.

    The first ``- `` bullet is the message and the next bullet is its
    description.  Without any bullet, the first line is the message and the
    second line is the description.
    """
    lines = [line.strip() for line in selection.split("\n") if line.strip()]
    if not lines:
        return None

    message = ""
    description = ""
    for line in lines:
        if not line.startswith("- "):
            continue
        if not message:
            message = line[2:].strip()
        elif not description:
            description = line[2:].strip()
            break

    if not message:
        message = lines[0]
        if len(lines) > 1:
            match = _SELECTION_LINE_RE.match(lines[1])
            if match:
                description = match.group(1).strip()

    if not message:
        return None
    return Insight(message=message, description=description)
