from unittest.mock import AsyncMock, MagicMock

import pytest

from rephraser.clients import MockLLMClient
from rephraser.core import Rephraser
from rephraser.errors import ActionNotFoundError, RateLimitError


@pytest.mark.asyncio
async def test_rephrase_end_to_end_with_mock(resolver):
    output = MagicMock()
    rephraser = Rephraser(resolver, MockLLMClient(delay=0), output)

    result = await rephraser.rephrase("polite", "こんにちは")

    assert "お元気でしょうか" in result
    output.handle.assert_called_once_with(result)


@pytest.mark.asyncio
async def test_rephrase_sends_rendered_prompt(resolver):
    client = MagicMock()
    client.complete = AsyncMock(return_value="done")
    rephraser = Rephraser(resolver, client)

    assert await rephraser.rephrase("summarize", "long text") == "done"
    client.complete.assert_awaited_once_with(resolver.resolve("summarize", "long text"))


@pytest.mark.asyncio
async def test_unknown_action_never_calls_client(resolver):
    client = MagicMock()
    client.complete = AsyncMock()
    output = MagicMock()

    with pytest.raises(ActionNotFoundError):
        await Rephraser(resolver, client, output).rephrase("nonexistent", "test")
    client.complete.assert_not_awaited()
    output.handle.assert_not_called()


@pytest.mark.asyncio
async def test_client_error_skips_output(resolver):
    client = MagicMock()
    client.complete = AsyncMock(side_effect=RateLimitError("slow down"))
    output = MagicMock()

    with pytest.raises(RateLimitError):
        await Rephraser(resolver, client, output).rephrase("polite", "text")
    output.handle.assert_not_called()
