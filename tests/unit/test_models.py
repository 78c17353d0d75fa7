"""Tests for enumerations, request models and tool results."""

import pytest

from knows.models import (
    AnswerRequest,
    AnswerType,
    AutoTaggingRequest,
    DataScope,
    EvidenceDetailRequest,
    EvidenceRequest,
    HistoryRequest,
    SearchRequest,
    ToolResult,
)
from knows.utils.validators import ValidationError


class TestDataScope:
    """Tests for DataScope parsing."""

    @pytest.mark.parametrize("value", ["PAPER", "paper", "  Paper "])
    def test_parse_normalizes(self, value):
        """Test case and whitespace are ignored."""
        assert DataScope.parse(value) is DataScope.PAPER

    def test_parse_unknown(self):
        """Test unknown scopes list the allowed values."""
        with pytest.raises(ValidationError) as exc_info:
            DataScope.parse("AUDIO")
        assert "'AUDIO'" in exc_info.value.message
        assert "PAPER, PAPER_CN, GUIDE, MEETING" in exc_info.value.message

    def test_parse_blank(self):
        """Test blank scopes are rejected."""
        with pytest.raises(ValidationError, match="data scope must be non-empty"):
            DataScope.parse("  ")

    def test_parse_many_dedupes(self):
        """Test duplicates collapse while order is kept."""
        assert DataScope.parse_many(["guide", "PAPER", "Guide"]) == [DataScope.GUIDE, DataScope.PAPER]

    def test_translation_support(self):
        """Test only Chinese papers lack translation."""
        assert DataScope.PAPER.supports_translation
        assert not DataScope.PAPER_CN.supports_translation


class TestAnswerType:
    """Tests for AnswerType parsing."""

    def test_parse(self):
        """Test normalization."""
        assert AnswerType.parse(" popular_science ") is AnswerType.POPULAR_SCIENCE

    def test_parse_unknown(self):
        """Test unknown answer types list the allowed values."""
        with pytest.raises(ValidationError, match="allowed: CLINICAL, RESEARCH, POPULAR_SCIENCE"):
            AnswerType.parse("POETIC")


class TestRequestPayloads:
    """Tests for request payload rendering."""

    def test_search_payload(self):
        """Test the question is sent as query with scope values."""
        request = SearchRequest(question="Statins in elderly?", data_scope=(DataScope.GUIDE, DataScope.PAPER))
        assert request.to_payload() == {"query": "Statins in elderly?", "data_scope": ["GUIDE", "PAPER"]}

    def test_search_requires_scope(self):
        """Test an empty scope is invalid."""
        with pytest.raises(ValueError):
            SearchRequest(question="q", data_scope=())

    def test_answer_payload(self):
        """Test enums are sent as their values."""
        request = AnswerRequest(question_id="q-1", answer_type=AnswerType.CLINICAL)
        assert request.to_payload() == {"question_id": "q-1", "answer_type": "CLINICAL"}

    def test_evidence_payload_omits_unset_translation(self):
        """Test the translation flag is only sent when supplied."""
        assert EvidenceRequest(evidence_id="ev-1").to_payload() == {"evidence_id": "ev-1"}
        assert EvidenceRequest(evidence_id="ev-1", translate_to_chinese=False).to_payload() == {
            "evidence_id": "ev-1",
            "translate_to_chinese": False,
        }

    def test_detail_request_for_chinese_paper_drops_translation(self):
        """Test Chinese paper lookups never carry the translation flag."""
        request = EvidenceDetailRequest(evidence_id="cn-1", type=DataScope.PAPER_CN, translate_to_chinese=True)
        assert request.for_kind() == EvidenceRequest(evidence_id="cn-1")

    def test_auto_tagging_payload_omits_empty_fields(self):
        """Test optional tagging fields are only sent when set."""
        request = AutoTaggingRequest(tagging_type="PICO", content="Aspirin vs placebo")
        assert request.to_payload() == {"tagging_type": "PICO", "content": "Aspirin vs placebo"}

    def test_history_payload_omits_unset_fields(self):
        """Test only supplied listing fields are sent."""
        assert HistoryRequest(page=2).to_payload() == {"page": 2}
        assert HistoryRequest().to_payload() == {}

    def test_requests_are_immutable(self):
        """Test request models are frozen."""
        request = EvidenceRequest(evidence_id="ev-1")
        with pytest.raises(ValueError):
            request.evidence_id = "ev-2"


class TestToolResult:
    """Tests for ToolResult."""

    def test_success_is_compact_json(self):
        """Test successful results are compact, non-ASCII-escaped JSON."""
        result = ToolResult.success({"question_id": "q-1", "title": "指南"})
        assert result.content == '{"question_id":"q-1","title":"指南"}'
        assert result.is_error is False

    def test_failure(self):
        """Test failure results carry the message."""
        result = ToolResult.failure("question is required")
        assert result.is_error is True
        with pytest.raises(ValueError):
            result.json_data()

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_success_rejects_non_finite_numbers(self, value):
        """Test NaN and infinities are refused rather than written as invalid JSON."""
        with pytest.raises(ValueError):
            ToolResult.success({"score": value})
