"""
User settings: provider credentials, model choice, system prompt, and the
Airtable destination.

Settings are persisted as a flat JSON object (see ``SettingsStore``) and
merged over the defaults on load, so new keys pick up defaults and unknown
keys are ignored.  Environment credentials from ``config`` only fill gaps at
runtime and are never written back to disk.
"""

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from messages_from_today import config
from messages_from_today.errors import ConfigurationError
from messages_from_today.models import DEFAULT_MODELS, PROVIDERS, model_ids

logger = logging.getLogger(__name__)


DEFAULT_SYSTEM_PROMPT = """\
You are an insightful assistant that helps extract meaningful messages from daily notes.

Your role is to:
1. Read the daily note content carefully
2. Identify key insights, learnings, or meaningful observations
3. Extract up to 3 insightful messages that capture the value of the day's records
4. Each message should be a one-line statement that could inspire writing
5. Each message should have a brief description explaining the insight

Focus on:
- Personal growth moments
- Interesting ideas or connections
- Emotional insights or realizations
- Actionable wisdom
- Unique perspectives

Respond in JSON format:
{
  "insights": [
    {
      "message": "One-line insightful message",
      "description": "Brief explanation of why this is valuable"
    }
  ]
}

IMPORTANT: Respond ONLY with valid JSON, no additional text."""


@dataclass
class ProviderConfig:
    """Which AI provider to call, with per-provider credentials and models."""
    provider: str = "openai"
    openai_api_key: str = ""
    openai_model: str = DEFAULT_MODELS["openai"]
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODELS["gemini"]
    claude_api_key: str = ""
    claude_model: str = DEFAULT_MODELS["claude"]
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    def api_key_for(self, provider: str) -> str:
        return getattr(self, f"{provider}_api_key", "")


@dataclass
class ForwardingConfig:
    """Airtable destination and the column names insights are written to."""
    api_key: str = ""
    base_id: str = ""
    table_name: str = "Messages"
    message_field: str = "Message"
    description_field: str = "Description"


# Flat JSON key → ForwardingConfig attribute
_FORWARDING_KEYS = {
    "airtable_api_key": "api_key",
    "airtable_base_id": "base_id",
    "airtable_table_name": "table_name",
    "airtable_message_field": "message_field",
    "airtable_description_field": "description_field",
}

_PROVIDER_KEYS = tuple(f.name for f in dataclasses.fields(ProviderConfig))

SETTING_KEYS = _PROVIDER_KEYS + tuple(_FORWARDING_KEYS)

SECRET_KEYS = ("openai_api_key", "gemini_api_key", "claude_api_key", "airtable_api_key")


@dataclass
class Settings:
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    forwarding: ForwardingConfig = field(default_factory=ForwardingConfig)

    # ── Flat (de)serialisation ────────────────────────────────────────

    def to_dict(self) -> dict:
        data = dataclasses.asdict(self.provider)
        for key, attr in _FORWARDING_KEYS.items():
            data[key] = getattr(self.forwarding, attr)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        settings = cls()
        for key, value in data.items():
            if key not in SETTING_KEYS:
                logger.debug("Ignoring unknown setting %r", key)
                continue
            if value is None:
                continue
            settings._set(key, str(value))
        return settings

    def _set(self, key: str, value: str) -> None:
        if key in _FORWARDING_KEYS:
            setattr(self.forwarding, _FORWARDING_KEYS[key], value)
        else:
            setattr(self.provider, key, value)

    # ── User edits ────────────────────────────────────────────────────

    def update(self, key: str, value: str) -> None:
        """Apply a single user edit, validating provider and model names."""
        if key not in SETTING_KEYS:
            raise ConfigurationError(
                f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}"
            )
        if key == "provider" and value not in PROVIDERS:
            raise ConfigurationError(
                f"Unknown AI provider: {value}. Choose one of: {', '.join(PROVIDERS)}"
            )
        if key.endswith("_model"):
            provider = key[: -len("_model")]
            allowed = model_ids(provider)
            if value not in allowed:
                raise ConfigurationError(
                    f"Unknown {provider} model: {value}. Choose one of: {', '.join(allowed)}"
                )
        self._set(key, value)

    def masked(self) -> dict:
        """Settings for display, with credentials hidden."""
        data = self.to_dict()
        for key in SECRET_KEYS:
            if data[key]:
                data[key] = data[key][:4] + "…" if len(data[key]) > 8 else "****"
        return data

    def with_env_credentials(self) -> "Settings":
        """Copy with empty credentials filled from the environment."""
        provider = dataclasses.replace(
            self.provider,
            openai_api_key=self.provider.openai_api_key or config.OPENAI_API_KEY,
            gemini_api_key=self.provider.gemini_api_key or config.GEMINI_API_KEY,
            claude_api_key=self.provider.claude_api_key or config.ANTHROPIC_API_KEY,
        )
        forwarding = dataclasses.replace(
            self.forwarding,
            api_key=self.forwarding.api_key or config.AIRTABLE_API_KEY,
        )
        return Settings(provider=provider, forwarding=forwarding)


class SettingsStore:
    """Reads and writes settings as JSON on disk."""

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else config.SETTINGS_FILE

    def load(self) -> Settings:
        if not self.path.exists():
            logger.info("No settings file at %s - using defaults.", self.path)
            return Settings()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Settings file {self.path} is not valid JSON: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self.path} must hold a JSON object")
        return Settings.from_dict(data)

    def save(self, settings: Settings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
        logger.info("Settings saved → %s", self.path)
