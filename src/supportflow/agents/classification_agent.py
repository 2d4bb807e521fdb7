"""
Classification Agent using LangGraph

One classification attempt as a linear graph:
1. compose_prompt - Render memory and fill the classification template
2. invoke_model - Call the completion service
3. validate_output - Strict parse, extraction repair or safe default
4. generate_response - Ask the model for a tone-matched personalized reply
5. normalize_output - Normalize every text field of the record
6. apply_confidence_gate - Flag low-confidence results for manual review
7. update_memory - Remember the exchange for future prompts

Any exception escapes ``run`` so the engine can retry the whole attempt.
"""

from dataclasses import dataclass
from typing import TypedDict

import structlog
from langgraph.graph import END, StateGraph

from supportflow.agents.confidence import ConfidenceGate
from supportflow.agents.memory import ClassificationMemory
from supportflow.agents.output_parser import ClassificationOutputParser, ParsedClassification
from supportflow.agents.prompts import compose_classification_prompt, compose_response_prompt
from supportflow.exceptions import TransientInferenceError
from supportflow.models.classification import ClassificationResult, ParseTier
from supportflow.models.ticket import TicketInput
from supportflow.services.llm import InferenceClient
from supportflow.utils.text import normalize_structure, normalize_text

logger = structlog.get_logger(__name__)

MEMORY_DECISION_FIELDS = {
    "category",
    "priority",
    "severity",
    "confidence",
    "summary",
    "impact_level",
    "urgency_level",
    "escalation_required",
}


class ClassificationState(TypedDict):
    """State for the classification attempt graph."""

    # Input
    ticket_id: str
    ticket: TicketInput
    attempt: int

    # Processing state
    current_step: str
    history: str
    prompt: str
    raw_output: str
    parsed: ParsedClassification | None
    personalized_response: str

    # Final results
    classification: ClassificationResult | None
    needs_manual_review: bool


@dataclass(frozen=True)
class AttemptOutcome:
    """What a successful attempt hands back to the engine."""

    classification: ClassificationResult
    needs_manual_review: bool
    parse_tier: ParseTier


class ClassificationAgent:
    """LangGraph pipeline for a single classification attempt."""

    def __init__(
        self,
        inference_client: InferenceClient,
        memory: ClassificationMemory,
        confidence_gate: ConfidenceGate,
        output_parser: ClassificationOutputParser | None = None,
    ):
        self.inference_client = inference_client
        self.memory = memory
        self.confidence_gate = confidence_gate
        self.output_parser = output_parser or ClassificationOutputParser()

        # Build the graph
        self.graph = self._build_graph()

    def _build_graph(self):
        """Build the LangGraph workflow."""
        workflow = StateGraph(ClassificationState)

        # Add nodes
        workflow.add_node("compose_prompt", self.compose_prompt)
        workflow.add_node("invoke_model", self.invoke_model)
        workflow.add_node("validate_output", self.validate_output)
        workflow.add_node("generate_response", self.generate_response)
        workflow.add_node("normalize_output", self.normalize_output)
        workflow.add_node("apply_confidence_gate", self.apply_confidence_gate)
        workflow.add_node("update_memory", self.update_memory)

        # Set entry point
        workflow.set_entry_point("compose_prompt")

        # Add edges
        workflow.add_edge("compose_prompt", "invoke_model")
        workflow.add_edge("invoke_model", "validate_output")
        workflow.add_edge("validate_output", "generate_response")
        workflow.add_edge("generate_response", "normalize_output")
        workflow.add_edge("normalize_output", "apply_confidence_gate")
        workflow.add_edge("apply_confidence_gate", "update_memory")
        workflow.add_edge("update_memory", END)

        return workflow.compile()

    async def run(self, ticket_id: str, ticket: TicketInput, attempt: int = 1) -> AttemptOutcome:
        """Run one attempt through the full graph."""
        initial_state: ClassificationState = {
            "ticket_id": ticket_id,
            "ticket": ticket,
            "attempt": attempt,
            "current_step": "start",
            "history": "",
            "prompt": "",
            "raw_output": "",
            "parsed": None,
            "personalized_response": "",
            "classification": None,
            "needs_manual_review": False,
        }

        final_state = await self.graph.ainvoke(initial_state)

        return AttemptOutcome(
            classification=final_state["classification"],
            needs_manual_review=final_state["needs_manual_review"],
            parse_tier=final_state["parsed"].tier,
        )

    # =========================================================================
    # Graph Nodes
    # =========================================================================

    async def compose_prompt(self, state: ClassificationState) -> dict:
        """Fill the classification prompt with the ticket and recent memory."""
        history = self.memory.render_recent()
        prompt = compose_classification_prompt(state["ticket"], history)
        return {"current_step": "compose_prompt", "history": history, "prompt": prompt}

    async def invoke_model(self, state: ClassificationState) -> dict:
        raw_output = await self.inference_client.complete(state["prompt"])
        return {"current_step": "invoke_model", "raw_output": raw_output}

    async def validate_output(self, state: ClassificationState) -> dict:
        parsed = self.output_parser.parse(
            state["raw_output"], customer_name=state["ticket"].customer_name
        )

        logger.debug(
            "Model output validated",
            ticket_id=state["ticket_id"],
            tier=parsed.tier.value,
            errors=list(parsed.errors),
        )
        return {"current_step": "validate_output", "parsed": parsed}

    async def generate_response(self, state: ClassificationState) -> dict:
        """
        Generate the personalized customer reply.

        A transient failure here does not fail the attempt; the reply falls
        back to the personalized, then the suggested, response from the
        classification itself.
        """
        result = state["parsed"].result
        prompt = compose_response_prompt(state["ticket"], result)

        try:
            response = normalize_text(await self.inference_client.complete(prompt))
        except TransientInferenceError as e:
            logger.warning(
                "Response generation failed, using classification response",
                ticket_id=state["ticket_id"],
                error=str(e),
            )
            response = ""

        if not response:
            response = result.personalized_response or result.suggested_response

        return {"current_step": "generate_response", "personalized_response": response}

    async def normalize_output(self, state: ClassificationState) -> dict:
        record = state["parsed"].result.model_dump(mode="json")
        record["personalized_response"] = state["personalized_response"]
        classification = ClassificationResult.model_validate(normalize_structure(record))
        return {"current_step": "normalize_output", "classification": classification}

    async def apply_confidence_gate(self, state: ClassificationState) -> dict:
        classification = state["classification"]
        needs_review = self.confidence_gate.needs_manual_review(classification.confidence)

        if needs_review:
            logger.info(
                "Routing to manual review",
                ticket_id=state["ticket_id"],
                confidence=classification.confidence,
                threshold=self.confidence_gate.threshold,
            )

        return {"current_step": "apply_confidence_gate", "needs_manual_review": needs_review}

    async def update_memory(self, state: ClassificationState) -> dict:
        ticket = state["ticket"]
        decision = state["classification"].model_dump_json(
            include=MEMORY_DECISION_FIELDS, by_alias=True
        )
        self.memory.append(f"{ticket.subject}: {ticket.description}", decision)
        return {"current_step": "update_memory"}
