"""Offline judgment client adapter.

Use this module as a reference when implementing new provider adapters:
implement BaseJudgmentClient and register the provider in JudgeFactory.
"""

import json
from typing import ClassVar

from report_audit.judgment.client_base import BaseJudgmentClient


class ExampleClientAdapter(BaseJudgmentClient):
    """Returns a fixed passing verdict without any network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "overallStatus": "PASS",
        "summary": "Example provider: no issues found",
        "issues": [],
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
