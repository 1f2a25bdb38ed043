"""
CLI entry point for Messages from Today.

Usage:
  python -m messages_from_today generate <note>          # Add insights to a note
  python -m messages_from_today send <note>              # Send the note's messages to Airtable
  python -m messages_from_today send-selection <text|->  # Send one selected message
  python -m messages_from_today insights <note>          # Show messages already in a note
  python -m messages_from_today models [--provider P]    # List models with pricing
  python -m messages_from_today settings                 # Show current settings
  python -m messages_from_today set <key> <value>        # Change a setting
"""

import argparse
import dataclasses
import json
import sys
from pathlib import Path

from messages_from_today.errors import ConfigurationError
from messages_from_today.models import MODEL_CATALOG, PROVIDERS
from messages_from_today.orchestrator import MessagesFromToday
from messages_from_today.services.note_formatter import parse_insights
from messages_from_today.settings import SettingsStore


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="messages-from-today",
        description="Extract insightful messages from daily notes and forward them to Airtable.",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to the settings JSON file (overrides MFT_SETTINGS_FILE env var).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate insights and insert them into a note.")
    generate.add_argument("note", type=Path, help="Path to the daily note.")

    send = sub.add_parser("send", help="Send every message in the note's section to Airtable.")
    send.add_argument("note", type=Path, help="Path to the daily note.")

    selection = sub.add_parser("send-selection", help="Send one selected message to Airtable.")
    selection.add_argument("text", help="Selected text, or '-' to read from stdin.")

    insights = sub.add_parser("insights", help="Print the messages already in a note.")
    insights.add_argument("note", type=Path, help="Path to the daily note.")

    models = sub.add_parser("models", help="List available models with pricing.")
    models.add_argument("--provider", choices=PROVIDERS, default=None)

    sub.add_parser("settings", help="Show current settings (credentials masked).")

    set_cmd = sub.add_parser("set", help="Change a setting and save it.")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")

    return parser


def _require_note(path: Path) -> None:
    if not path.exists():
        print(f"Error: file not found - {path}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    if args.command == "models":
        for provider in [args.provider] if args.provider else PROVIDERS:
            print(f"{provider}:")
            for model in MODEL_CATALOG[provider]:
                print(f"  {model.id:<28} {model.display_label}")
        return

    if args.command == "insights":
        _require_note(args.note)
        found = parse_insights(args.note.read_text(encoding="utf-8"))
        print(json.dumps([dataclasses.asdict(i) for i in found], indent=2, ensure_ascii=False))
        return

    try:
        app = MessagesFromToday(store=SettingsStore(args.settings))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.command == "generate":
        _require_note(args.note)
        if app.generate_for_note(args.note) is None:
            sys.exit(1)

    elif args.command == "send":
        _require_note(args.note)
        sent, failed = app.send_note_messages(args.note)
        if failed or not sent:
            sys.exit(1)

    elif args.command == "send-selection":
        text = sys.stdin.read() if args.text == "-" else args.text
        if not app.send_selection(text):
            sys.exit(1)

    elif args.command == "settings":
        print(json.dumps(app.settings.masked(), indent=2, ensure_ascii=False))

    elif args.command == "set":
        try:
            app.update_setting(args.key, args.value)
        except ConfigurationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        print(f"{args.key} updated.")


if __name__ == "__main__":
    main()
