import asyncio
import logging

from ..constants import PROVIDER_MOCK
from .base import LLMClient

logger = logging.getLogger(__name__)

MOCK_MODEL_NAME = "mock-model-v1"
DEFAULT_MOCK_RESPONSE = "[Mock LLM Response] Processed successfully."

DEFAULT_MOCK_RESPONSES = {
    "polite": "こんにちは、お元気でしょうか。いつもありがとうございます。",
    "organize": """整理されたテキスト：

1. 主要ポイント
   - 項目A
   - 項目B

2. 詳細説明
   - 説明1
   - 説明2

3. まとめ
   - 結論""",
    "summarize": "要約: このテキストは主要な3つのポイントを含んでいます。",
}

# Words in the built-in Japanese templates that identify the action
ACTION_MARKERS = {
    "丁寧": "polite",
    "整理": "organize",
    "要約": "summarize",
}


class MockLLMClient(LLMClient):
    """Deterministic client that returns canned responses without network access."""

    def __init__(
        self,
        responses: dict[str, str] | None = None,
        default_response: str = DEFAULT_MOCK_RESPONSE,
        delay: float = 0.1,
    ):
        self.responses: dict[str, str] = dict(DEFAULT_MOCK_RESPONSES if responses is None else responses)
        self.default_response = default_response
        self.delay = delay

    @property
    def provider_name(self) -> str:
        return PROVIDER_MOCK

    @property
    def model_name(self) -> str:
        return MOCK_MODEL_NAME

    def add_response(self, action: str, response: str) -> None:
        """Add or replace the canned response for ``action``."""
        self.responses[action] = response

    def set_default_response(self, response: str) -> None:
        self.default_response = response

    def _extract_action(self, prompt: str) -> str | None:
        for action in self.responses:
            if action in prompt:
                return action
        for marker, action in ACTION_MARKERS.items():
            if marker in prompt:
                return action
        return None

    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(self.delay)

        action = self._extract_action(prompt)
        if action is not None and action in self.responses:
            logger.debug(f"Mock client matched action '{action}'")
            return self.responses[action]
        return self.default_response
