"""AI-powered report judge."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path

from report_audit.audit.models import AuditResult
from report_audit.judgment.base import BaseJudge
from report_audit.judgment.client_base import BaseJudgmentClient
from report_audit.judgment.exceptions import JudgmentResponseError, JudgmentTimeoutError
from report_audit.judgment.prompt_loader import load_prompt_template
from report_audit.judgment.validator import build_audit_result
from report_audit.logging.logger import Log

DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_CONTENT_CHARS = 80000


class Judge(BaseJudge):
    """Audits report content against rule texts using an AI provider."""

    def __init__(
        self,
        *,
        client: BaseJudgmentClient,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_content_chars: int = DEFAULT_MAX_CONTENT_CHARS,
        prompt_template_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._max_content_chars = max_content_chars
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)

    async def judge(self, content: str, rules: Sequence[str]) -> AuditResult:
        prompt = self._build_prompt(self._truncate(content), rules)
        Log.debug(f"Judgment prompt:\n{prompt}")

        raw_response = await self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        result = build_audit_result(self._parse_json(raw_response))
        Log.info(f"Judgment complete: {result.status.value}, {len(result.issues)} issues")
        return result

    def _truncate(self, content: str) -> str:
        if len(content) <= self._max_content_chars:
            return content
        Log.warning(
            f"Content truncated from {len(content)} to {self._max_content_chars} chars"
        )
        return content[: self._max_content_chars]

    def _build_prompt(self, content: str, rules: Sequence[str]) -> str:
        return self._prompt_template.format(
            rules="\n".join(f"- {rule}" for rule in rules),
            content=content,
        )

    async def _call_ai(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(
                self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    max_tokens=self._max_tokens,
                    system_prompt=self._system_prompt,
                    user_prompt=prompt,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise JudgmentTimeoutError(
                f"Judgment request timed out after {self._timeout_seconds}s"
            ) from exc

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise JudgmentResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise JudgmentResponseError("JSON response must be an object")
        return parsed
