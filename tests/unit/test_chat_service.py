"""
Test remedy chat: query validation, context formatting and answer parsing.
"""
import json

import pytest

from garden_shared.errors import UpstreamParseError, ValidationError
from herbal_garden.services.chat_service import (
    NO_RESULTS_RESPONSE,
    QUERY_REQUIRED_MESSAGE,
    RemedyChatService,
    build_context,
    validate_query,
)
from herbal_garden.services.parsing import parse_model_json, strip_code_fences
from tests.fakes import FakeGenerator, FakeIndex

TULSI_HIT = {
    "_id": "kb-stress-tulsi",
    "_score": 0.91234,
    "fields": {
        "condition": "Stress",
        "plantName": "Tulsi",
        "scientificName": "Ocimum tenuiflorum",
        "preparation": "Tea",
        "source": "Knowledge Base",
        "chunk_text": "Tulsi calms the mind.",
    },
}

ANSWER = {
    "summary": "Tulsi tea can ease stress.",
    "recommended_herbs": [{"name": "Tulsi", "scientific_name": "Ocimum tenuiflorum"}],
    "preparation": "Steep leaves for 5 minutes.",
    "disclaimer": "Educational only.",
}


@pytest.mark.unit
class TestValidateQuery:
    def test_trims(self):
        assert validate_query({"query": "  stress  "}) == "stress"

    @pytest.mark.parametrize("payload", [None, [], {}, {"query": ""}, {"query": "   "}, {"query": 42}])
    def test_rejects(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            validate_query(payload)
        assert exc_info.value.error.message == QUERY_REQUIRED_MESSAGE


@pytest.mark.unit
class TestBuildContext:
    def test_formats_numbered_blocks(self):
        context = build_context([TULSI_HIT])
        assert context.splitlines() == [
            "[Remedy 1 — Score: 0.912]",
            "Health Condition: Stress",
            "Herb: Tulsi (Ocimum tenuiflorum)",
            "Preparation: Tea",
            "Source: Knowledge Base",
            "Details: Tulsi calms the mind.",
        ]

    def test_missing_fields_use_placeholders(self):
        context = build_context([{"_id": "x"}])
        assert "Score: N/A" in context
        assert "Health Condition: Unknown" in context
        assert "Herb: Unknown (Unknown)" in context
        assert "Preparation: N/A" in context
        assert "Details: N/A" in context

    def test_blocks_separated_by_blank_line(self):
        context = build_context([TULSI_HIT, TULSI_HIT])
        assert context.count("\n\n") == 1
        assert "[Remedy 2 — Score: 0.912]" in context


@pytest.mark.unit
class TestParseModelJson:
    def test_strips_fences(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert parse_model_json('```\n{"a": 1}\n```') == {"a": 1}

    def test_invalid_json(self):
        with pytest.raises(UpstreamParseError):
            parse_model_json("Tulsi is great for stress")

    def test_non_object(self):
        with pytest.raises(UpstreamParseError):
            parse_model_json("[1, 2]")


@pytest.mark.unit
class TestRemedyChatService:
    @pytest.mark.asyncio
    async def test_no_hits_returns_canned_answer(self):
        generator = FakeGenerator()
        service = RemedyChatService(FakeIndex(), generator, namespace="ayurveda")

        assert await service.answer("stress") == NO_RESULTS_RESPONSE
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_answers_from_hits(self):
        index = FakeIndex(hits=[TULSI_HIT])
        generator = FakeGenerator(f"```json\n{json.dumps({**ANSWER, 'extra': 1})}\n```")
        service = RemedyChatService(index, generator, namespace="ayurveda", top_k=3)

        assert await service.answer("stress") == ANSWER
        assert index.searches[0]["namespace"] == "ayurveda"
        assert index.searches[0]["top_k"] == 3
        assert index.searches[0]["rank_fields"] == ["chunk_text"]
        prompt = generator.calls[0]["prompt"]
        assert "[Remedy 1 — Score: 0.912]" in prompt
        assert "stress" in prompt

    @pytest.mark.asyncio
    async def test_unparseable_answer(self):
        service = RemedyChatService(FakeIndex(hits=[TULSI_HIT]), FakeGenerator("not json"), namespace="ayurveda")
        with pytest.raises(UpstreamParseError):
            await service.answer("stress")
