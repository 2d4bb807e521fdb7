"""Tests for prompt composition."""

from supportflow.agents.memory import NO_HISTORY
from supportflow.agents.prompts import compose_classification_prompt, compose_response_prompt
from supportflow.models.classification import CATEGORIES, ClassificationResult
from supportflow.models.ticket import TicketInput


class TestClassificationPrompt:
    """Test the classification prompt."""

    def test_defaults_for_missing_customer_data(self):
        ticket = TicketInput(subject="Question", description="How do I export data?")

        prompt = compose_classification_prompt(ticket, NO_HISTORY)

        assert "Customer Name: Valued Customer" in prompt
        assert "Customer Priority: Standard" in prompt
        assert "Source: unknown" in prompt
        assert NO_HISTORY in prompt

    def test_ticket_fields_and_history(self, sample_ticket):
        history = "Human: Ticket: Old issue: details\nAI: Classification: {}"

        prompt = compose_classification_prompt(sample_ticket, history)

        assert "Subject: System is down" in prompt
        assert "Description: Complete system outage affecting all users" in prompt
        assert "Customer Name: Test User" in prompt
        assert "Source: email" in prompt
        assert history in prompt

    def test_vip_priority(self):
        ticket = TicketInput(
            subject="Slow dashboard",
            description="Pages take a minute to load",
            customer_info={"name": "Jane", "priority": "VIP"},
        )

        prompt = compose_classification_prompt(ticket, NO_HISTORY)

        assert "Customer Priority: VIP" in prompt

    def test_lists_vocabularies_and_json_contract(self, sample_ticket):
        prompt = compose_classification_prompt(sample_ticket, NO_HISTORY)

        for category in CATEGORIES:
            assert f"- {category}:" in prompt
        assert "Can wait" in prompt
        assert '"suggestedResponse"' in prompt
        assert '"urgencyLevel"' in prompt
        assert "{{" not in prompt
        assert "single JSON object" in prompt


class TestResponsePrompt:
    """Test the response generation prompt."""

    def test_classification_fields(self, sample_ticket, valid_payload):
        classification = ClassificationResult.model_validate(valid_payload)

        prompt = compose_response_prompt(sample_ticket, classification)

        assert prompt.startswith("Generate a comprehensive, personalized customer support response")
        assert "Category: Technical" in prompt
        assert "Priority: High" in prompt
        assert "Severity: Critical" in prompt
        assert "Impact Level: System-wide" in prompt
        assert "Urgency Level: Immediate" in prompt
        assert "Escalation Required: true" in prompt
        assert "Customer Name: Test User" in prompt
        assert "Subject: System is down" in prompt

    def test_escalation_false(self, sample_ticket, valid_payload):
        classification = ClassificationResult.model_validate(
            {**valid_payload, "escalationRequired": False}
        )

        prompt = compose_response_prompt(sample_ticket, classification)

        assert "Escalation Required: false" in prompt
