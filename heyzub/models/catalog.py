"""Built-in catalog of language models HeyZub knows how to drive."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModelInfo:
    name: str
    provider: str
    capabilities: tuple[str, ...] = field(default_factory=tuple)


BUILTIN_MODELS = (
    ModelInfo(
        name="Claude 3.5 Sonnet",
        provider="Anthropic",
        capabilities=("function-calling", "context-management", "advanced-reasoning"),
    ),
    ModelInfo(
        name="Mistral 7B",
        provider="Ollama",
        capabilities=("local-inference", "multilingual", "open-source"),
    ),
)


def list_models() -> list[ModelInfo]:
    """Return the available models."""
    return list(BUILTIN_MODELS)
