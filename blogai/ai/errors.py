from __future__ import annotations


class AIProviderError(RuntimeError):
    def __init__(self, message: str, *, code: str = "provider_error"):
        super().__init__(message)
        self.code = code


class AIConfigurationError(AIProviderError):
    """Raised before any network call when the provider settings are incomplete."""

    def __init__(self, message: str):
        super().__init__(message, code="configuration")


class AIProviderHTTPError(AIProviderError):
    """Raised for non-success statuses and connection-level failures."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = ""):
        super().__init__(message, code="transport")
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "AIProviderHTTPError":
        return cls(f"API error {status_code}: {body}", status_code=status_code, body=body)

    @classmethod
    def from_network(cls, reason: object) -> "AIProviderHTTPError":
        return cls(f"fetch failed: {reason}")
