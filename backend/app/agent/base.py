from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from app.agent.llm_client import LLMClient
from app.core.config import settings

InType = TypeVar("InType", bound=BaseModel)
OutType = TypeVar("OutType", bound=BaseModel)


class BaseAgent(ABC, Generic[InType, OutType]):
    """
    Abstract base class for the analysis agents.

    Each agent turns a structured request into a prompt, issues one text
    completion and decodes the answer into its result artifact.
    """

    system_prompt: str = ""

    def __init__(self, model_name: str | None = None, llm: LLMClient | None = None):
        self.llm = llm or LLMClient(model_name=model_name or settings.MODEL_DEFAULT)

    @abstractmethod
    def build_user_prompt(self, input_data: InType) -> str:
        """Render the user message for `input_data`."""

    @abstractmethod
    def parse_response(self, content: str, input_data: InType) -> OutType:
        """Decode the raw model answer."""

    async def run(self, input_data: InType) -> OutType:
        prompt = self.build_user_prompt(input_data)
        content = await self.llm.generate_text(
            system_prompt=self.system_prompt,
            user_prompt=prompt,
        )
        return self.parse_response(content, input_data)
