"""Tests for the inference client."""

import asyncio

import httpx
import openai
import pytest
from langchain_core.messages import AIMessage

from supportflow.config import settings
from supportflow.exceptions import ConfigurationError, TransientInferenceError
from supportflow.services.llm import InferenceClient, get_llm_client, message_text
from tests.conftest import ScriptedLLM


class SlowLLM:
    async def ainvoke(self, prompt):
        await asyncio.sleep(10)
        return AIMessage(content="too late")


def openai_status_error(cls, status_code: int):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return cls("rejected", response=httpx.Response(status_code, request=request), body=None)


@pytest.fixture
def no_credentials(monkeypatch):
    monkeypatch.setattr(settings, "azure_openai_api_key", "")
    monkeypatch.setattr(settings, "azure_openai_endpoint", "")
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "anthropic_api_key", "")


class TestMessageText:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("plain", "plain"),
            (["a", {"type": "text", "text": "b"}, {"type": "image_url"}], "ab"),
            (42, "42"),
        ],
    )
    def test_flatten(self, content, expected):
        assert message_text(content) == expected


class TestInferenceClient:
    """Test completion and error mapping."""

    @pytest.mark.asyncio
    async def test_complete_returns_text(self):
        llm = ScriptedLLM(lambda prompt: f"echo: {prompt}")
        client = InferenceClient(llm=llm, model_name="test-model")

        assert await client.complete("hello") == "echo: hello"
        assert llm.prompts == ["hello"]

    @pytest.mark.asyncio
    async def test_authentication_error_is_configuration_error(self):
        error = openai_status_error(openai.AuthenticationError, 401)
        client = InferenceClient(llm=ScriptedLLM(lambda prompt: error), model_name="test-model")

        with pytest.raises(ConfigurationError) as exc_info:
            await client.complete("hello")

        assert exc_info.value.details == {"model": "test-model"}

    @pytest.mark.asyncio
    async def test_not_found_is_configuration_error(self):
        error = openai_status_error(openai.NotFoundError, 404)
        client = InferenceClient(llm=ScriptedLLM(lambda prompt: error))

        with pytest.raises(ConfigurationError):
            await client.complete("hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            RuntimeError("connection reset"),
            openai_status_error(openai.RateLimitError, 429),
            openai_status_error(openai.InternalServerError, 500),
        ],
    )
    async def test_other_errors_are_transient(self, error):
        client = InferenceClient(llm=ScriptedLLM(lambda prompt: error))

        with pytest.raises(TransientInferenceError):
            await client.complete("hello")

    @pytest.mark.asyncio
    async def test_timeout_is_transient(self):
        client = InferenceClient(llm=SlowLLM(), timeout=0.01)

        with pytest.raises(TransientInferenceError) as exc_info:
            await client.complete("hello")

        assert "timed out" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_credentials(self, no_credentials):
        client = InferenceClient()

        with pytest.raises(ConfigurationError):
            await client.complete("hello")


class TestModelSelection:
    """Test model configuration."""

    def test_empty_model_name_rejected(self):
        client = InferenceClient(llm=ScriptedLLM(lambda prompt: ""), model_name="test-model")

        with pytest.raises(ConfigurationError):
            client.model_name = "  "

        assert client.model_name == "test-model"

    def test_injected_model_survives_rename(self):
        llm = ScriptedLLM(lambda prompt: "")
        client = InferenceClient(llm=llm, model_name="test-model")

        client.model_name = "other-model"

        assert client.model_name == "other-model"
        assert client.llm is llm

    def test_built_model_rebuilt_on_rename(self, no_credentials, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", "sk-test")
        client = InferenceClient(model_name="gpt-4o-mini")
        first = client.llm

        client.model_name = "gpt-4o"

        assert client.llm is not first
        assert client.llm.model_name == "gpt-4o"

    def test_openai_client_selected(self, no_credentials, monkeypatch):
        from langchain_openai import ChatOpenAI

        monkeypatch.setattr(settings, "openai_api_key", "sk-test")

        llm = get_llm_client("gpt-4o-mini", temperature=0.1, max_tokens=1000)

        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == "gpt-4o-mini"
        assert llm.max_retries == 0

    def test_no_provider(self, no_credentials):
        with pytest.raises(ConfigurationError):
            get_llm_client("gpt-4o-mini", temperature=0.1, max_tokens=1000)
