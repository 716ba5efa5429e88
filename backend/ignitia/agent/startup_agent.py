import logging
from typing import Any

from ignitia.agent.base import BaseAgent
from ignitia.agent.normalizer import normalize_response
from ignitia.agent.prompts.startup import build_startup_prompt

logger = logging.getLogger(__name__)


class StartupAgent(BaseAgent[str, Any]):
    """
    Turns a free-text startup idea into the model's startup object:
    name, tagline, description, audience, features, colors and landing page.
    """

    async def run(self, input_data: str) -> Any:
        prompt = build_startup_prompt(input_data)
        logger.info("Generating startup for idea: %s", input_data[:100])
        envelope = await self.llm.complete_envelope(prompt)
        return normalize_response(envelope)
