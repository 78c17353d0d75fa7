"""Live integration tests for the KnowS API.

These tests make real API calls and are skipped unless credentials are set.
Run with: KNOWS_API_KEY=... KNOWS_API_BASE_URL=... pytest tests/integration/
"""

import pytest

from knows.config.settings import KnowsSettings
from knows.tools import build_toolkit

settings = KnowsSettings()

pytestmark = pytest.mark.skipif(
    not settings.is_configured,
    reason="Live API tests need KNOWS_API_KEY and KNOWS_API_BASE_URL",
)


class TestKnowsLive:
    """Live tests for the KnowS tools."""

    @pytest.mark.asyncio
    async def test_search_returns_question_id(self):
        """Test that a search returns a question_id."""
        async with build_toolkit(settings) as toolkit:
            result = await toolkit.get("knows_ai_search").execute(
                {"question": "Aspirin for primary prevention of cardiovascular disease", "data_scope": ["PAPER"]},
                timeout=120,
            )

        assert not result.is_error, result.content
        assert result.json_data().get("question_id")

    @pytest.mark.asyncio
    async def test_search_then_answer(self):
        """Test answering a freshly searched question."""
        async with build_toolkit(settings) as toolkit:
            search = await toolkit.get("knows_ai_search").execute(
                {"question": "Statins in adults over 75"},
                timeout=120,
            )
            question_id = search.json_data()["question_id"]

            answer = await toolkit.get("knows_answer").execute(
                {"question_id": question_id, "answer_type": "CLINICAL"},
                timeout=300,
            )

        assert not answer.is_error, answer.content

    @pytest.mark.asyncio
    async def test_list_question(self):
        """Test listing question history."""
        async with build_toolkit(settings) as toolkit:
            result = await toolkit.get("knows_list_question").execute({"page": 1, "page_size": 5})

        assert not result.is_error, result.content
