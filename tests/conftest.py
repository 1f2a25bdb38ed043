"""Shared fixtures: no log files, no credentials leaking in from the environment."""

import pytest

from messages_from_today import config
from messages_from_today.models import Insight
from messages_from_today.settings import ForwardingConfig, ProviderConfig


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    monkeypatch.setattr(config, "LOG_FILE", "")
    monkeypatch.setattr(config, "OPENAI_API_KEY", "")
    monkeypatch.setattr(config, "GEMINI_API_KEY", "")
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "")
    monkeypatch.setattr(config, "AIRTABLE_API_KEY", "")


@pytest.fixture
def provider_config():
    return ProviderConfig(
        provider="openai",
        openai_api_key="sk-test",
        gemini_api_key="gm-test",
        claude_api_key="sk-ant-test",
        system_prompt="SYSTEM",
    )


@pytest.fixture
def forwarding_config():
    return ForwardingConfig(
        api_key="pat-test",
        base_id="appBASE",
        table_name="Daily Messages",
        message_field="Message",
        description_field="Description",
    )


@pytest.fixture
def insight():
    return Insight(message="Walking clears the mind", description="Noted after today's walk")
