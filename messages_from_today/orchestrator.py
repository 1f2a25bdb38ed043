"""
Orchestrator - ties settings, insight generation, note editing, and Airtable
forwarding together into the user-facing actions.

Actions:
  1. generate        - note → AI provider → insights inserted under the heading
  2. send_selection  - selected text → one Airtable row
  3. send_note       - every insight in the note's section → Airtable rows

Every action catches its own errors and reports them through ``notify``;
nothing is re-raised to the caller.
"""

import logging
from pathlib import Path
from typing import Callable

from messages_from_today import config
from messages_from_today.errors import MessagesFromTodayError
from messages_from_today.models import Insight
from messages_from_today.services.ai_service import AIService
from messages_from_today.services.airtable_service import AirtableService
from messages_from_today.services.note_formatter import (
    MESSAGES_HEADER,
    insert_insights,
    parse_insights,
    parse_selected_message,
)
from messages_from_today.settings import Settings, SettingsStore

logger = logging.getLogger(__name__)


class MessagesFromToday:
    """Top-level app that owns settings and the services built from them."""

    def __init__(
        self,
        store: SettingsStore | None = None,
        notify: Callable[[str], None] = print,
    ):
        self._setup_logging()
        self.store = store or SettingsStore()
        self.notify = notify
        self.settings: Settings = self.store.load()
        self._build_services()

    def _setup_logging(self) -> None:
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if config.LOG_FILE:
            handlers.append(logging.FileHandler(config.LOG_FILE))
        logging.basicConfig(
            level=getattr(logging, config.LOG_LEVEL, logging.INFO),
            format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            handlers=handlers,
        )

    # ── Settings ──────────────────────────────────────────────────────

    def _build_services(self) -> None:
        effective = self.settings.with_env_credentials()
        self.ai_service = AIService(effective.provider)
        self.airtable_service = AirtableService(effective.forwarding)

    def save_settings(self) -> None:
        """Persist settings and rebuild services so none hold stale config."""
        self.store.save(self.settings)
        self._build_services()

    def update_setting(self, key: str, value: str) -> None:
        self.settings.update(key, value)
        self.save_settings()

    def _report_failure(self, action: str, exc: Exception) -> None:
        if isinstance(exc, MessagesFromTodayError):
            logger.error("%s failed: %s", action, exc)
        else:
            logger.exception("%s failed", action)
        self.notify(f"Error: {exc}")

    # ── Action 1: Generate ────────────────────────────────────────────

    def generate_for_note(self, note_path: Path) -> list[Insight] | None:
        """
        Generate insights for a note and write them under the messages
        heading.  Returns the insights added, or None if generation failed.
        """
        try:
            content = note_path.read_text(encoding="utf-8")
        except OSError as exc:
            self._report_failure("Reading note", exc)
            return None

        if not content.strip():
            self.notify("The current note is empty")
            return []

        self.notify("Generating insights...")
        try:
            insights = self.ai_service.generate(content)
            if not insights:
                self.notify("No insights generated")
                return []
            note_path.write_text(insert_insights(content, insights), encoding="utf-8")
        except Exception as exc:
            self._report_failure("Insight generation", exc)
            return None

        logger.info("Inserted %d insight(s) into %s", len(insights), note_path)
        self.notify(f"Generated {len(insights)} insight(s)")
        return insights

    # ── Action 2: Send selection ──────────────────────────────────────

    def send_selection(self, selection: str) -> bool:
        if not selection.strip():
            self.notify("Please select a message and its description")
            return False

        insight = parse_selected_message(selection)
        if insight is None:
            self.notify(
                "Could not parse the selected message. "
                "Please select a message line and its description."
            )
            return False

        self.notify("Sending to Airtable...")
        try:
            self.airtable_service.send_message(insight)
        except Exception as exc:
            self._report_failure("Sending to Airtable", exc)
            return False

        self.notify("Message sent to Airtable successfully!")
        return True

    # ── Action 3: Send every insight in a note ────────────────────────

    def send_note_messages(self, note_path: Path) -> tuple[int, int]:
        """
        Forward each insight under the messages heading.  One failure does
        not stop the rest; returns (sent, failed).
        """
        try:
            content = note_path.read_text(encoding="utf-8")
        except OSError as exc:
            self._report_failure("Reading note", exc)
            return 0, 0

        insights = parse_insights(content)
        if not insights:
            self.notify(f"No messages found under '{MESSAGES_HEADER}'")
            return 0, 0

        sent = failed = 0
        last_error = ""
        for insight in insights:
            try:
                self.airtable_service.send_message(insight)
                sent += 1
            except Exception as exc:
                failed += 1
                last_error = str(exc)
                if isinstance(exc, MessagesFromTodayError):
                    logger.error("Could not send '%s': %s", insight.message, exc)
                else:
                    logger.exception("Could not send '%s'", insight.message)

        summary = f"Sent {sent} message(s) to Airtable, {failed} failed"
        if last_error:
            summary += f" (last error: {last_error})"
        self.notify(summary)
        return sent, failed
