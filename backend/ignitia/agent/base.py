from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ignitia.agent.llm_client import LLMClient
from ignitia.core.config import settings

InType = TypeVar("InType")
OutType = TypeVar("OutType")


class BaseAgent(ABC, Generic[InType, OutType]):
    """Abstract base class for agents that turn one input into one artifact."""

    def __init__(self, model_name: str | None = None, llm: LLMClient | None = None):
        self.model_name = model_name or settings.MODEL_DEFAULT
        self._llm = llm

    @property
    def llm(self) -> LLMClient:
        # Built on first use so input validation can fail before any client setup.
        if self._llm is None:
            self._llm = LLMClient(model_name=self.model_name)
        return self._llm

    @abstractmethod
    async def run(self, input_data: InType) -> OutType:
        """Run the agent on the given input to produce the output artifact."""
        pass
