class ServiceError(Exception):
    """Raised when the judgment service cannot produce a verdict."""


class JudgmentTimeoutError(ServiceError):
    """Raised when a judgment call exceeds its time budget."""


class JudgmentNetworkError(ServiceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class JudgmentResponseError(ServiceError):
    """Raised when the provider reply is empty or not a usable verdict."""
