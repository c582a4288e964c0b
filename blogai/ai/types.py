from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, Mapping, Protocol


Role = Literal["system", "user", "assistant"]

# Stands in for a stored API key on read; never a real key on write.
API_KEY_MASK = "••••••••"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class InferenceRuntime(Protocol):
    async def run(self, model: str, inputs: Mapping[str, Any]) -> Any: ...


@dataclass(frozen=True)
class AISummaryConfig:
    """Routing decision for automatic summaries and test invocations."""

    enabled: bool = False
    provider: str = "worker-ai"
    model: str = "llama-3-8b"
    api_key: str = ""
    api_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
