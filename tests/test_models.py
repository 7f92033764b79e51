"""Tests for research_credibility_analyzer.models module."""

import pytest
from pydantic import ValidationError

from research_credibility_analyzer.models import (
    AcademicField,
    AnalysisResult,
    BookmarkedPaper,
    CredibilityRating,
    CredibilityScore,
    DocumentType,
    FrameworkWeights,
    KeyFindings,
    Paper,
)


class TestCredibilityScore:
    """Test cases for CredibilityScore."""

    def test_camel_case_input(self):
        """Test creating a score from the provider's camelCase keys."""
        data = {
            "methodologicalRigor": {"score": 2.0, "maxScore": 2.5, "description": "ok", "evidence": ["n=400"]},
            "totalScore": 6.5,
            "rating": "Moderate",
        }
        score = CredibilityScore.model_validate(data)

        assert score.total_score == 6.5
        assert score.rating == CredibilityRating.MODERATE
        assert score.methodological_rigor.max_score == 2.5
        assert score.data_transparency is None

    def test_snake_case_input(self):
        """Test that Python field names are accepted as well."""
        score = CredibilityScore(total_score=3.0, rating=CredibilityRating.WEAK)
        assert score.total_score == 3.0

    def test_missing_total_score(self):
        """Test that a missing totalScore raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            CredibilityScore.model_validate({"rating": "Strong"})
        assert "totalScore" in {str(error["loc"][0]) for error in exc_info.value.errors()}

    def test_invalid_rating(self):
        """Test that ratings outside the band names are rejected."""
        with pytest.raises(ValidationError):
            CredibilityScore.model_validate({"totalScore": 5.0, "rating": "Excellent"})

    def test_dump_uses_wire_names(self):
        """Test that by_alias dumps use camelCase keys."""
        dumped = CredibilityScore(total_score=5.0, max_total_score=10.0).model_dump(by_alias=True)
        assert dumped["totalScore"] == 5.0
        assert dumped["maxTotalScore"] == 10.0


class TestFrameworkWeights:
    """Test cases for FrameworkWeights."""

    def test_total(self):
        """Test that total sums all six maxima."""
        weights = FrameworkWeights(
            methodological_rigor=2.5, data_transparency=2.0, source_quality=1.5,
            author_credibility=1.0, statistical_validity=2.0, logical_consistency=1.0,
        )
        assert weights.total == pytest.approx(10.0)

    def test_frozen(self):
        """Test that weights cannot be modified."""
        weights = FrameworkWeights(
            methodological_rigor=1, data_transparency=1, source_quality=1,
            author_credibility=1, statistical_validity=1, logical_consistency=1,
        )
        with pytest.raises(ValidationError):
            weights.source_quality = 5


class TestPaper:
    """Test cases for Paper."""

    def test_minimal_paper(self):
        """Test that only id and title are required."""
        paper = Paper(id="file-abc", title="Upload")
        assert paper.authors == []
        assert paper.document_type is None

    def test_enum_fields_from_strings(self):
        """Test that type and field accept their string values."""
        paper = Paper.model_validate({"id": "W1", "title": "T", "documentType": "case-study",
                                      "field": "social-sciences"})
        assert paper.document_type == DocumentType.CASE_STUDY
        assert paper.field == AcademicField.SOCIAL_SCIENCES


class TestAnalysisResult:
    """Test cases for AnalysisResult and BookmarkedPaper."""

    def _result(self):
        return AnalysisResult(
            paper=Paper(id="W1", title="Trial"),
            credibility=CredibilityScore(total_score=7.0, rating=CredibilityRating.MODERATE),
            timestamp="2024-01-01T00:00:00+00:00",
        )

    def test_sections_default_empty(self):
        """Test that bias, key findings and perspective default to empty sections."""
        result = self._result()
        assert result.bias.biases == []
        assert result.key_findings == KeyFindings()
        assert result.perspective.paradigm == ""

    def test_result_is_immutable(self):
        """Test that results cannot be reassigned after creation."""
        result = self._result()
        with pytest.raises(ValidationError):
            result.timestamp = "later"

    def test_bookmark_json_roundtrip(self):
        """Test that a bookmark survives a JSON dump and reload."""
        bookmark = BookmarkedPaper(id="W1-1", analysis=self._result(),
                                   bookmarked_at="2024-01-02T00:00:00+00:00", notes="check stats")
        restored = BookmarkedPaper.model_validate_json(bookmark.model_dump_json(by_alias=True))
        assert restored == bookmark
