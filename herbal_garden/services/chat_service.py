"""
Remedy Chat Service.

Retrieves remedy records from the vector index, formats them as numbered
context blocks and asks the generative model for a structured answer.
"""

import logging
from typing import Any

from garden_shared.errors import ValidationError
from herbal_garden.clients.generation import TextGenerator
from herbal_garden.clients.pinecone import VectorIndexClient
from herbal_garden.services.parsing import parse_model_json
from herbal_garden.services.prompts import remedy_prompt

logger = logging.getLogger(__name__)

QUERY_REQUIRED_MESSAGE = "A non-empty 'query' string is required."

NO_RESULTS_RESPONSE: dict[str, Any] = {
    "summary": "No relevant Ayurvedic information was found for your query.",
    "recommended_herbs": [],
    "preparation": "N/A",
    "disclaimer": (
        "This information is for educational purposes only. "
        "Consult a qualified healthcare provider for medical advice."
    ),
}


def validate_query(payload: Any) -> str:
    """
    Extract the trimmed query from a request body.

    Raises:
        ValidationError: If query is missing, not a string, or blank
    """
    query = payload.get("query") if isinstance(payload, dict) else None
    if not isinstance(query, str) or not query.strip():
        raise ValidationError(QUERY_REQUIRED_MESSAGE, details={"field": "query"})
    return query.strip()


def format_score(score: Any) -> str:
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return "N/A"
    return f"{score:.3f}"


def build_context(hits: list[dict[str, Any]]) -> str:
    """
    Render search hits as numbered remedy blocks separated by blank lines.

    Missing condition and herb names render as ``Unknown``; every other
    missing field renders as ``N/A``.
    """
    blocks = []
    for i, hit in enumerate(hits, start=1):
        fields = hit.get("fields") or {}
        blocks.append(
            f"[Remedy {i} — Score: {format_score(hit.get('_score'))}]\n"
            f"Health Condition: {fields.get('condition') or 'Unknown'}\n"
            f"Herb: {fields.get('plantName') or 'Unknown'} ({fields.get('scientificName') or 'Unknown'})\n"
            f"Preparation: {fields.get('preparation') or 'N/A'}\n"
            f"Source: {fields.get('source') or 'N/A'}\n"
            f"Details: {fields.get('chunk_text') or 'N/A'}"
        )
    return "\n\n".join(blocks)


class RemedyChatService:
    """Answers symptom questions from the remedy knowledge base."""

    def __init__(
        self,
        index: VectorIndexClient,
        generator: TextGenerator,
        namespace: str,
        top_k: int = 5,
        rerank_model: str | None = "bge-reranker-v2-m3",
    ):
        self.index = index
        self.generator = generator
        self.namespace = namespace
        self.top_k = top_k
        self.rerank_model = rerank_model

    async def answer(self, query: str) -> dict[str, Any]:
        """
        Answer a trimmed, non-empty query.

        Returns:
            Dict with summary, recommended_herbs, preparation, disclaimer

        Raises:
            UpstreamParseError: Model answer was not a JSON object
        """
        hits = await self.index.search_records(
            self.namespace,
            query,
            top_k=self.top_k,
            rerank_model=self.rerank_model,
            rank_fields=["chunk_text"],
        )

        if not hits:
            logger.info("No remedies matched query")
            return dict(NO_RESULTS_RESPONSE)

        result = await self.generator.generate(remedy_prompt(build_context(hits), query))
        parsed = parse_model_json(result.text)
        logger.info("Answered from %d remedies", len(hits), extra={"model": result.model})

        return {
            "summary": parsed.get("summary"),
            "recommended_herbs": parsed.get("recommended_herbs"),
            "preparation": parsed.get("preparation"),
            "disclaimer": parsed.get("disclaimer"),
        }
