"""
AI Service - sends a daily note to the configured provider and returns the
extracted insights.

Each provider differs only in how the request is shaped and where the text
sits in the response, so providers are a closed mapping of name → call
function rather than a class hierarchy.  Every call function returns the raw
model text, which is handed to the shared response parser.

  openai  - chat completions; reasoning models (o1/o3/o4) get the system
            prompt folded into the user message and temperature 1
  gemini  - generate_content with prompt and note in one text part
  claude  - messages API with a top-level system prompt
"""

import logging
from typing import Callable

import anthropic
import openai
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
from openai import OpenAI

from messages_from_today.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
)
from messages_from_today.models import PROVIDER_NAMES, Insight, is_reasoning_model
from messages_from_today.services.response_parser import parse_ai_response
from messages_from_today.settings import ProviderConfig

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
REASONING_TEMPERATURE = 1
CLAUDE_MAX_TOKENS = 2048


# ── Prompt helpers ────────────────────────────────────────────────────

def _user_prompt(content: str) -> str:
    return f"Daily Note Content:\n{content}"


def _combined_prompt(system_prompt: str, content: str) -> str:
    return f"{system_prompt}\n\n---\n\n{_user_prompt(content)}"


def _require_api_key(provider: str, config: ProviderConfig) -> str:
    api_key = config.api_key_for(provider)
    if not api_key:
        raise ConfigurationError(
            f"{PROVIDER_NAMES[provider]} API key is not configured. "
            "Please add your API key in settings."
        )
    return api_key


def _invalid_key(provider: str) -> AuthenticationError:
    return AuthenticationError(
        f"{PROVIDER_NAMES[provider]} API key is invalid. "
        "Please check your API key in settings."
    )


def _api_error(provider: str, exc: Exception) -> ProviderError:
    detail = getattr(exc, "message", None) or str(exc)
    return ProviderError(f"{PROVIDER_NAMES[provider]} API error: {detail}")


# ── Provider calls ────────────────────────────────────────────────────

def _call_openai(content: str, config: ProviderConfig) -> str:
    api_key = _require_api_key("openai", config)
    model = config.openai_model

    if is_reasoning_model(model):
        messages = [
            {"role": "user", "content": _combined_prompt(config.system_prompt, content)},
        ]
        temperature = REASONING_TEMPERATURE
    else:
        messages = [
            {"role": "system", "content": config.system_prompt},
            {"role": "user", "content": _user_prompt(content)},
        ]
        temperature = DEFAULT_TEMPERATURE

    logger.info("Calling OpenAI | model=%s temperature=%s", model, temperature)
    client = OpenAI(api_key=api_key)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
        )
    except openai.AuthenticationError as exc:
        raise _invalid_key("openai") from exc
    except openai.APIError as exc:
        raise _api_error("openai", exc) from exc

    if not response.choices:
        raise ProviderError("OpenAI API error: response contained no choices")
    return response.choices[0].message.content or ""


def _call_gemini(content: str, config: ProviderConfig) -> str:
    api_key = _require_api_key("gemini", config)
    model = config.gemini_model

    logger.info("Calling Gemini | model=%s", model)
    client = genai.Client(api_key=api_key)
    try:
        response = client.models.generate_content(
            model=model,
            contents=[
                genai_types.Content(
                    role="user",
                    parts=[genai_types.Part(text=_combined_prompt(config.system_prompt, content))],
                )
            ],
            config=genai_types.GenerateContentConfig(temperature=DEFAULT_TEMPERATURE),
        )
    except genai_errors.APIError as exc:
        if exc.code in (401, 403):
            raise _invalid_key("gemini") from exc
        raise _api_error("gemini", exc) from exc

    candidates = response.candidates or []
    if not candidates or not candidates[0].content or not candidates[0].content.parts:
        raise ProviderError("Gemini API error: response contained no candidates")
    return candidates[0].content.parts[0].text or ""


def _call_claude(content: str, config: ProviderConfig) -> str:
    api_key = _require_api_key("claude", config)
    model = config.claude_model

    logger.info("Calling Claude | model=%s", model)
    client = anthropic.Anthropic(api_key=api_key)
    try:
        response = client.messages.create(
            model=model,
            max_tokens=CLAUDE_MAX_TOKENS,
            system=config.system_prompt,
            messages=[{"role": "user", "content": _user_prompt(content)}],
        )
    except anthropic.AuthenticationError as exc:
        raise _invalid_key("claude") from exc
    except anthropic.APIError as exc:
        raise _api_error("claude", exc) from exc

    if not response.content:
        raise ProviderError("Claude API error: response contained no content")
    return getattr(response.content[0], "text", "") or ""


_PROVIDER_CALLS: dict[str, Callable[[str, ProviderConfig], str]] = {
    "openai": _call_openai,
    "gemini": _call_gemini,
    "claude": _call_claude,
}


def generate_insights(content: str, config: ProviderConfig) -> list[Insight]:
    """Ask the configured provider for up to three insights about ``content``."""
    call = _PROVIDER_CALLS.get(config.provider)
    if call is None:
        raise ConfigurationError(f"Unknown AI provider: {config.provider}")

    raw_text = call(content, config)
    insights = parse_ai_response(raw_text)
    logger.info("%s returned %d insight(s).", PROVIDER_NAMES[config.provider], len(insights))
    return insights


class AIService:
    """Insight generation bound to one snapshot of provider settings."""

    def __init__(self, config: ProviderConfig):
        self.config = config

    def generate(self, content: str) -> list[Insight]:
        return generate_insights(content, self.config)
