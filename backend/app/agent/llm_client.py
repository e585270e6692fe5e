import logging
import re

from openai import AsyncOpenAI, OpenAIError

from app.core.config import settings

logger = logging.getLogger(__name__)


class LLMServiceError(Exception):
    """Raised when the text-generation provider fails or returns nothing usable."""


def _strip_code_fences(text: str) -> str:
    if not text:
        return ""
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


class LLMClient:
    """Provider-agnostic chat client speaking the OpenAI chat completions API."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        temperature: float | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature

        self._api_key = api_key
        self._base_url = base_url
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """
        The underlying AsyncOpenAI client, created on first use and reused afterwards.
        A missing or invalid provider configuration surfaces as LLMServiceError.
        """
        if self._client is None:
            try:
                self._client = AsyncOpenAI(
                    base_url=self._base_url or settings.LLM_BASE_URL,
                    api_key=self._api_key or settings.LLM_API_KEY or settings.OPENAI_API_KEY,
                    timeout=settings.LLM_TIMEOUT_SECONDS,
                )
            except OpenAIError as e:
                logger.error("Cannot configure LLM provider for %s: %s", self.model_name, e)
                raise LLMServiceError(f"Provider {self.model_name} is not configured") from e
        return self._client

    def _chat_completion_kwargs(self, *, temperature: float | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        model_name = (self.model_name or "").lower()
        # GPT-5 family rejects non-default temperature values in some OpenAI endpoints.
        if model_name.startswith("gpt-5"):
            return {}
        if temperature is None:
            return {}
        return {"temperature": temperature}

    async def generate_text(
        self, system_prompt: str, user_prompt: str, *, temperature: float | None = None
    ) -> str:
        """
        Issue a single chat completion and return the stripped text answer.
        Markdown code fences wrapping the whole answer are removed.
        """
        client = self.client
        logger.info("Issuing text request to model %s...", self.model_name)
        try:
            response = await client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **self._chat_completion_kwargs(
                    temperature=self.temperature if temperature is None else temperature
                ),
            )
        except Exception as e:
            logger.error("Error calling LLM provider %s: %s", self.model_name, e)
            raise LLMServiceError(f"Provider {self.model_name} request failed") from e

        if not getattr(response, "choices", None):
            logger.error("Received 0 choices from %s: %s", self.model_name, response)
            raise LLMServiceError(f"Provider {self.model_name} returned no output")

        text_response = _strip_code_fences(response.choices[0].message.content or "")
        if not text_response:
            raise LLMServiceError(f"Provider {self.model_name} returned empty content")

        logger.info("Successfully received text response from %s.", self.model_name)
        return text_response
