"""
Inference Client

Sends one fully composed prompt to the configured chat model and returns the
completion text. Errors are mapped onto the SupportFlow taxonomy; retrying is
left to the classification engine.
"""

import asyncio
from typing import Any

import anthropic
import openai
import structlog
from langchain_core.language_models import BaseChatModel

from supportflow.config import settings
from supportflow.exceptions import ConfigurationError, TransientInferenceError

logger = structlog.get_logger(__name__)

# SDK errors that retrying cannot fix
FATAL_SDK_ERRORS: tuple[type[Exception], ...] = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
    anthropic.AuthenticationError,
    anthropic.PermissionDeniedError,
    anthropic.NotFoundError,
)


def get_llm_client(
    model_name: str,
    temperature: float,
    max_tokens: int,
) -> BaseChatModel:
    """Get the appropriate chat model based on available credentials."""
    # Try Azure OpenAI first
    if settings.azure_openai_api_key and settings.azure_openai_endpoint:
        from langchain_openai import AzureChatOpenAI

        return AzureChatOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            api_version=settings.azure_openai_api_version,
            deployment_name=settings.azure_openai_deployment_name,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )

    # Try direct OpenAI
    if settings.openai_api_key:
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )

    # Try Anthropic
    if settings.anthropic_api_key:
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            temperature=temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )

    raise ConfigurationError(
        "No LLM API key configured. Set AZURE_OPENAI_API_KEY, OPENAI_API_KEY, or ANTHROPIC_API_KEY"
    )


def message_text(content: Any) -> str:
    """Flatten chat message content (a string or a list of parts) into text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


class InferenceClient:
    """
    Single-shot completion client.

    Runs at low temperature with a bounded token limit. A chat model may be
    injected; otherwise one is built lazily from settings on first use.
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        model_name: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
    ):
        self._llm = llm
        self._injected = llm is not None
        self._model_name = model_name or settings.default_model
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.timeout = timeout or settings.llm_request_timeout

    @property
    def model_name(self) -> str:
        return self._model_name

    @model_name.setter
    def model_name(self, value: str) -> None:
        if not value or not value.strip():
            raise ConfigurationError("Model name must not be empty")
        self._model_name = value
        if not self._injected:
            # Rebuilt with the new model on next use
            self._llm = None
        logger.info("Model updated", model=value)

    @property
    def llm(self) -> BaseChatModel:
        """Get or create the chat model."""
        if self._llm is None:
            self._llm = get_llm_client(
                model_name=self._model_name,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        return self._llm

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the raw completion text."""
        llm = self.llm

        try:
            response = await asyncio.wait_for(llm.ainvoke(prompt), timeout=self.timeout)
        except FATAL_SDK_ERRORS as e:
            logger.error("Completion service rejected configuration", error=str(e))
            raise ConfigurationError(str(e), details={"model": self._model_name}) from e
        except asyncio.TimeoutError as e:
            logger.warning("Completion request timed out", timeout=self.timeout)
            raise TransientInferenceError(
                f"Completion request timed out after {self.timeout}s",
                details={"model": self._model_name},
            ) from e
        except Exception as e:
            logger.warning("Completion request failed", error=str(e), error_type=type(e).__name__)
            raise TransientInferenceError(str(e), details={"model": self._model_name}) from e

        text = message_text(getattr(response, "content", response))
        logger.debug("Completion received", model=self._model_name, length=len(text))
        return text
