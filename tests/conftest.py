"""Pytest configuration and fixtures."""

import json
from collections.abc import Callable

import pytest
import structlog
from langchain_core.messages import AIMessage

from supportflow.agents.memory import ClassificationMemory
from supportflow.models.ticket import TicketInput
from supportflow.services.classification import ClassificationEngine
from supportflow.services.llm import InferenceClient

RESPONSE_PROMPT_PREFIX = "Generate a comprehensive, personalized customer support response"


def is_response_prompt(prompt: str) -> bool:
    return prompt.startswith(RESPONSE_PROMPT_PREFIX)


class ScriptedLLM:
    """Stands in for a LangChain chat model. ``reply(prompt)`` returns text or an exception."""

    def __init__(self, reply: Callable[[str], str | Exception]):
        self.reply = reply
        self.prompts: list[str] = []

    async def ainvoke(self, prompt: str) -> AIMessage:
        self.prompts.append(prompt)
        result = self.reply(prompt)
        if isinstance(result, Exception):
            raise result
        return AIMessage(content=result)

    @property
    def classification_calls(self) -> int:
        return sum(1 for p in self.prompts if not is_response_prompt(p))


class SleepRecorder:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def valid_payload():
    """Well-formed classification as the model would return it."""
    return {
        "category": "Technical",
        "priority": "High",
        "severity": "Critical",
        "confidence": 85,
        "summary": "System outage affecting all users",
        "reasoning": "Critical system failure requires immediate attention",
        "tags": ["outage", "system", "critical"],
        "suggestedResponse": "We are aware of the system outage and our team is working to resolve it immediately.",
        "personalizedResponse": "Dear Test User, we are aware of the system outage.",
        "resolutionSteps": ["Page on-call engineer", "Restore service", "Publish post-mortem"],
        "estimatedResolutionTime": "2-4 hours",
        "escalationRequired": True,
        "impactLevel": "System-wide",
        "urgencyLevel": "Immediate",
    }


@pytest.fixture
def sample_ticket():
    """Sample ticket for testing."""
    return TicketInput(
        subject="System is down",
        description="Complete system outage affecting all users",
        customer_info={"name": "Test User"},
        source="email",
    )


@pytest.fixture
def sample_tickets_batch():
    """Sample batch of tickets for testing."""
    return [
        (
            "BATCH-001",
            TicketInput(subject="Login issue", description="Cannot log into account", source="web"),
        ),
        (
            "BATCH-002",
            TicketInput(
                subject="Billing question",
                description="Question about my invoice",
                source="email",
            ),
        ),
    ]


@pytest.fixture
def scripted_reply(valid_payload):
    """Reply function returning valid JSON for classification and plain text for responses."""

    def reply(prompt: str) -> str:
        if is_response_prompt(prompt):
            return "Dear Test User,\n\nWe are working on the outage right now ."
        return json.dumps(valid_payload)

    return reply


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def make_engine(sleep_recorder):
    """Build an engine around a scripted model with its own memory."""

    def factory(reply: Callable[[str], str | Exception], **kwargs) -> ClassificationEngine:
        return ClassificationEngine(
            inference_client=InferenceClient(llm=ScriptedLLM(reply), model_name="test-model"),
            memory=ClassificationMemory(),
            sleep=sleep_recorder,
            **kwargs,
        )

    return factory


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI commands configure structlog against a captured stream; undo it after each test."""
    yield
    structlog.reset_defaults()
