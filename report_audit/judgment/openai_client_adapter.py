import httpx
import openai

from report_audit.judgment.client_base import BaseJudgmentClient
from report_audit.judgment.exceptions import (
    JudgmentNetworkError,
    JudgmentResponseError,
    JudgmentTimeoutError,
    ServiceError,
)


class OpenAIClientAdapter(BaseJudgmentClient):
    """Judgment AI client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        provider: str = "openai",
    ) -> None:
        self._provider = provider
        self._client: openai.AsyncOpenAI | None = None
        if api_key:
            self._client = openai.AsyncOpenAI(
                api_key=api_key,
                timeout=timeout_seconds,
                base_url=base_url,
                max_retries=0,
            )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        if self._client is None:
            raise ServiceError(f"API key for judgment provider '{self._provider}' is not configured")
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise JudgmentTimeoutError(f"AI provider timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise JudgmentNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise JudgmentNetworkError(
                f"AI provider API error [{exc.status_code}]: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise JudgmentNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise JudgmentResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise JudgmentResponseError("AI returned empty response")
        return content
