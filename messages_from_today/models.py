"""Core value types and the per-provider model catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Insight:
    """A single insight: a one-line message plus a short description."""
    message: str
    description: str = ""


@dataclass(frozen=True)
class Pricing:
    """USD per one million tokens."""
    input: float
    output: float


@dataclass(frozen=True)
class ModelInfo:
    id: str
    label: str
    pricing: Pricing | None = None

    @property
    def display_label(self) -> str:
        if self.pricing is None:
            return self.label
        return f"{self.label} (${self.pricing.input:g}/${self.pricing.output:g} per 1M)"


PROVIDERS = ("openai", "gemini", "claude")

PROVIDER_NAMES = {
    "openai": "OpenAI",
    "gemini": "Gemini",
    "claude": "Claude",
}

# ── Model catalog ─────────────────────────────────────────────────────
# Order matches how models are offered to the user.

OPENAI_MODELS = [
    ModelInfo("gpt-5.2", "GPT-5.2 (Latest)"),
    ModelInfo("gpt-5.2-pro", "GPT-5.2 Pro"),
    ModelInfo("gpt-5.1", "GPT-5.1"),
    ModelInfo("gpt-5", "GPT-5"),
    ModelInfo("gpt-5-mini", "GPT-5 Mini"),
    ModelInfo("gpt-5-nano", "GPT-5 Nano"),
    ModelInfo("gpt-5-pro", "GPT-5 Pro"),
    ModelInfo("gpt-4.1", "GPT-4.1"),
    ModelInfo("gpt-4.1-mini", "GPT-4.1 Mini"),
    ModelInfo("gpt-4.1-nano", "GPT-4.1 Nano"),
    ModelInfo("gpt-4o", "GPT-4o", Pricing(2.5, 10)),
    ModelInfo("gpt-4o-mini", "GPT-4o Mini", Pricing(0.15, 0.6)),
    ModelInfo("o3", "o3 (Reasoning)"),
    ModelInfo("o3-mini", "o3 Mini"),
    ModelInfo("o3-pro", "o3 Pro"),
    ModelInfo("o4-mini", "o4 Mini"),
    ModelInfo("o1", "o1", Pricing(15, 60)),
    ModelInfo("o1-pro", "o1 Pro"),
    ModelInfo("o1-mini", "o1 Mini (Deprecated)", Pricing(3, 12)),
]

GEMINI_MODELS = [
    ModelInfo("gemini-2.0-flash", "Gemini 2.0 Flash", Pricing(0.1, 0.4)),
    ModelInfo("gemini-2.0-flash-lite", "Gemini 2.0 Flash Lite"),
    ModelInfo("gemini-1.5-flash", "Gemini 1.5 Flash", Pricing(0.075, 0.3)),
    ModelInfo("gemini-1.5-pro", "Gemini 1.5 Pro", Pricing(1.25, 5)),
]

CLAUDE_MODELS = [
    ModelInfo("claude-sonnet-4-20250514", "Claude Sonnet 4 (Latest)"),
    ModelInfo("claude-opus-4-20250514", "Claude Opus 4"),
    ModelInfo("claude-3-7-sonnet-20250219", "Claude 3.7 Sonnet"),
    ModelInfo("claude-3-7-sonnet-latest", "Claude 3.7 Sonnet (Latest)"),
    ModelInfo("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", Pricing(3, 15)),
    ModelInfo("claude-3-5-haiku-20241022", "Claude 3.5 Haiku"),
    ModelInfo("claude-3-opus-20240229", "Claude 3 Opus", Pricing(15, 75)),
    ModelInfo("claude-3-haiku-20240307", "Claude 3 Haiku", Pricing(0.25, 1.25)),
]

MODEL_CATALOG: dict[str, list[ModelInfo]] = {
    "openai": OPENAI_MODELS,
    "gemini": GEMINI_MODELS,
    "claude": CLAUDE_MODELS,
}

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.0-flash",
    "claude": "claude-3-5-sonnet-20241022",
}

REASONING_MODEL_PREFIXES = ("o1", "o3", "o4")


def model_ids(provider: str) -> list[str]:
    return [m.id for m in MODEL_CATALOG.get(provider, [])]


def is_reasoning_model(model: str) -> bool:
    """OpenAI reasoning models reject system messages and custom temperature."""
    return model.startswith(REASONING_MODEL_PREFIXES)
