import logging

from .actions import ActionResolver
from .clients import LLMClient
from .output import OutputHandler

logger = logging.getLogger(__name__)


class Rephraser:
    """Runs one action: resolve the prompt, call the LLM, deliver the result.

    The resolver, client and output handler are injected so the pipeline can
    be exercised without config files, credentials or OS output tools.
    """

    def __init__(self, resolver: ActionResolver, client: LLMClient, output: OutputHandler | None = None):
        self.resolver = resolver
        self.client = client
        self.output = output

    async def rephrase(self, action: str, text: str) -> str:
        """Transform ``text`` with ``action`` and return the completion.

        Errors from any stage propagate unchanged.
        """
        prompt = self.resolver.resolve(action, text)
        logger.info(
            f"Running action '{action}' with {self.client.provider_name} "
            f"(model: {self.client.model_name}, prompt: {len(prompt)} chars)"
        )
        logger.debug(f"Prompt: {prompt}")

        response = await self.client.complete(prompt)

        if self.output is not None:
            self.output.handle(response)
        return response
