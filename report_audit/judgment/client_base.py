from abc import ABC, abstractmethod


class BaseJudgmentClient(ABC):
    """Contract for provider-specific judgment AI clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Return provider response as plain text."""
