# src/pr_review_commenter/llm_reviewer.py
import json
import logging
import litellm  # type: ignore
from string import Template
import importlib.resources  # For loading prompt from package data
from typing import Dict, Any, Optional, TYPE_CHECKING

from .exceptions import ConfigurationError, LLMBackendError

if TYPE_CHECKING:
    from .reviewer_config import ReviewerConfig

logger = logging.getLogger(__name__)

PROMPT_PACKAGE = "pr_review_commenter"
PROMPT_FILE = "prompts/default_review_prompt.txt"


class CompletionBackend:
    """
    A text-generation backend reached through LiteLLM.

    Subclasses choose the model and the request parameters their provider
    accepts; the response is always reduced to the plain generated text.
    """
    provider = ""

    def __init__(self, model: str, api_key: Optional[str], max_tokens: int, temperature: float):
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.temperature = temperature

    def _completion_kwargs(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "api_key": self.api_key,
            "stream": False,
        }

    async def generate_text(self, prompt: str) -> str:
        """
        Sends `prompt` to the provider and returns the generated text.

        Raises:
            LLMBackendError: If the provider call fails or returns no content.
        """
        kwargs = self._completion_kwargs(prompt)
        if logger.isEnabledFor(logging.DEBUG):
            debug_kwargs = {k: v for k, v in kwargs.items() if k not in ("messages", "api_key")}
            logger.debug(f"LiteLLM request kwargs (messages and key omitted): {json.dumps(debug_kwargs, default=str)}")

        try:
            response = await litellm.acompletion(**kwargs)
        except litellm.exceptions.AuthenticationError as e:  # type: ignore
            raise LLMBackendError(f"{self.provider} API error: authentication failed: {e.message}") from e
        except litellm.exceptions.RateLimitError as e:  # type: ignore
            raise LLMBackendError(f"{self.provider} API error: rate limited: {e.message}") from e
        except litellm.exceptions.APIConnectionError as e:  # type: ignore
            raise LLMBackendError(f"{self.provider} API error: connection failed: {e.message}") from e
        except litellm.exceptions.APIError as e:  # type: ignore
            raise LLMBackendError(f"{self.provider} API error (status {e.status_code}): {e.message}") from e
        except litellm.exceptions.BadRequestError as e:  # type: ignore
            raise LLMBackendError(f"{self.provider} API error: bad request: {e.message}") from e
        except Exception as e:
            # Timeouts, 404s, 5xx and anything else litellm raises
            raise LLMBackendError(f"{self.provider} API error: {getattr(e, 'message', None) or e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            content = None
        if not content:
            raise LLMBackendError(f"No content returned by {self.provider} API.")
        return content


class OpenAIBackend(CompletionBackend):
    provider = "OpenAI"

    def _completion_kwargs(self, prompt: str) -> Dict[str, Any]:
        kwargs = super()._completion_kwargs(prompt)
        kwargs["max_tokens"] = self.max_tokens
        kwargs["temperature"] = self.temperature
        return kwargs


class GeminiBackend(CompletionBackend):
    provider = "Gemini"

    def _completion_kwargs(self, prompt: str) -> Dict[str, Any]:
        kwargs = super()._completion_kwargs(prompt)
        kwargs["max_tokens"] = self.max_tokens
        return kwargs


def build_backend(config: 'ReviewerConfig') -> CompletionBackend:
    """Returns the backend selected by API_PROVIDER."""
    if config.api_provider == "openai":
        return OpenAIBackend(config.openai_model, config.openai_api_key, config.max_tokens, config.temperature)
    if config.api_provider == "gemini":
        return GeminiBackend(config.gemini_model, config.gemini_api_key, config.max_tokens, config.temperature)
    raise ConfigurationError(f"Unsupported API_PROVIDER: {config.api_provider}")


class LLMReviewer:
    def __init__(self, config: 'ReviewerConfig', backend: Optional[CompletionBackend] = None):
        """
        Initializes the LLMReviewer.

        Args:
            config: The reviewer configuration.
            backend: Overrides the backend chosen from `config.api_provider`.
        """
        self.config = config
        self.backend = backend or build_backend(config)
        self.prompt_template = self._load_prompt_template()

    @staticmethod
    def _load_prompt_template() -> Template:
        """Loads the review prompt template from the packaged file."""
        prompt_file_ref = importlib.resources.files(PROMPT_PACKAGE).joinpath(PROMPT_FILE)
        template = Template(prompt_file_ref.read_text(encoding="utf-8"))
        logger.info("Prompt template loaded.")
        return template

    def build_prompt(self, filename: str, patch: str) -> str:
        return self.prompt_template.substitute(filename=filename, patch=patch)

    async def review_patch(self, filename: str, patch: str) -> str:
        """
        Requests a review of one file's patch.

        Returns:
            The raw review text produced by the model.
        """
        prompt = self.build_prompt(filename, patch)
        logger.info(f"Sending request to {self.backend.provider} for file: {filename}, model: {self.backend.model}")
        review_text = await self.backend.generate_text(prompt)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Review text for {filename}:\n{review_text}")
        return review_text
