"""Static model aliases and provider endpoints."""

from __future__ import annotations

from types import MappingProxyType

WORKER_AI_PROVIDER = "worker-ai"

WORKER_AI_MODELS = MappingProxyType(
    {
        "llama-3-8b": "@cf/meta/llama-3-8b-instruct",
        "llama-3-1-8b": "@cf/meta/llama-3.1-8b-instruct",
        "llama-2-7b": "@cf/meta/llama-2-7b-chat-int8",
        "mistral-7b": "@cf/mistral/mistral-7b-instruct-v0.1",
        "mistral-7b-v2": "@cf/mistral/mistral-7b-instruct-v0.2-lora",
        "gemma-2b": "@cf/google/gemma-2b-it-lora",
        "gemma-7b": "@cf/google/gemma-7b-it-lora",
        "deepseek-coder": "@cf/deepseek-ai/deepseek-coder-6.7b-base-awq",
        "qwen-7b": "@cf/qwen/qwen1.5-7b-chat-awq",
    }
)

PROVIDER_URLS = MappingProxyType(
    {
        "openai": "https://api.openai.com/v1",
        "claude": "https://api.anthropic.com/v1",
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai",
        "deepseek": "https://api.deepseek.com/v1",
    }
)


def resolve_model_id(alias: str) -> str:
    return WORKER_AI_MODELS.get(alias) or alias


def list_aliases(provider: str) -> list[str]:
    if provider == WORKER_AI_PROVIDER:
        return list(WORKER_AI_MODELS)
    return []


def provider_requires_credential(provider: str) -> bool:
    return provider != WORKER_AI_PROVIDER


def default_api_url(provider: str) -> str | None:
    return PROVIDER_URLS.get(provider)
