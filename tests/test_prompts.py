"""Tests for research_credibility_analyzer.utils.prompts module."""

import pytest

from research_credibility_analyzer.analysis.framework import get_framework_guidelines
from research_credibility_analyzer.models import AcademicField, DocumentType
from research_credibility_analyzer.utils.prompts import (
    CONTINUATION_MARKER,
    FULL_TEXT_THRESHOLD,
    MAX_DOCUMENT_CHARS,
    PromptContext,
    build_abstract_only_prompt,
    build_assessment_prompt,
    field_label,
    select_prompt,
    truncate_document,
)


def _context(text, document_type=DocumentType.ARTICLE, field=AcademicField.MEDICAL, title="Test Paper"):
    return PromptContext(
        document_title=title,
        document_type=document_type,
        field=field,
        framework=get_framework_guidelines(document_type, field),
        full_text=text,
    )


class TestTruncateDocument:
    """Test cases for document truncation."""

    def test_short_text_unchanged(self):
        """Test that short texts are embedded without the continuation marker."""
        result = truncate_document("short document")
        assert result.startswith("short document")
        assert CONTINUATION_MARKER not in result

    def test_long_text_truncated_with_marker(self):
        """Test that oversized texts are cut at the bound and marked."""
        text = "a" * (MAX_DOCUMENT_CHARS + 5000)
        result = truncate_document(text)
        assert result.endswith(CONTINUATION_MARKER)
        assert result.count("a") == MAX_DOCUMENT_CHARS

    def test_exact_bound_not_marked(self):
        """Test that a text exactly at the bound is not marked as continued."""
        result = truncate_document("b" * MAX_DOCUMENT_CHARS)
        assert CONTINUATION_MARKER not in result


class TestBuildAssessmentPrompt:
    """Test cases for the full-text prompt."""

    def test_embeds_framework_weights(self):
        """Test that every component maximum from the framework appears in the prompt."""
        prompt = build_assessment_prompt(_context("x" * 2000))
        assert "total possible: 10.0 points" in prompt
        assert "Methodological Rigor: Maximum score 2.5" in prompt
        assert "Data Transparency: Maximum score 2" in prompt
        assert "Logical Consistency: Maximum score 1" in prompt
        assert "totalScore must never exceed 10.0" in prompt

    def test_embeds_document_and_field(self):
        """Test that title, type and field appear in the document information block."""
        prompt = build_assessment_prompt(_context("Body text " * 200, title="Aspirin and Stroke"))
        assert "- Title: Aspirin and Stroke" in prompt
        assert "- Academic Field: medical" in prompt
        assert "- Document Type: Research Article" in prompt
        assert "Body text Body text" in prompt

    def test_embeds_focus_and_biases(self):
        """Test that assessment focus and bias priorities are listed."""
        framework = get_framework_guidelines(DocumentType.ARTICLE, AcademicField.MEDICAL)
        prompt = build_assessment_prompt(_context("x" * 2000))
        for item in framework.assessment_focus + framework.bias_priorities:
            assert item in prompt

    def test_missing_title(self):
        """Test that a missing title is shown as Unknown."""
        prompt = build_assessment_prompt(_context("x" * 2000, title=None))
        assert "- Title: Unknown" in prompt

    def test_demands_json_only(self):
        """Test that the prompt ends with the JSON-only instruction."""
        prompt = build_assessment_prompt(_context("x" * 2000))
        assert "Return ONLY valid JSON" in prompt
        assert '"credibility": {' in prompt


class TestBuildAbstractOnlyPrompt:
    """Test cases for the abstract-only prompt."""

    def test_theoretical_formal_abstract(self):
        """Test the abstract-only prompt for a short theoretical paper in the formal sciences."""
        abstract = "We prove a new bound on the chromatic number of sparse graphs. " * 3
        prompt = build_abstract_only_prompt("Sparse Graph Colouring", abstract,
                                            DocumentType.THEORETICAL, AcademicField.FORMAL_SCIENCES)
        assert "Assessment is based on abstract only." in prompt
        assert "- Document Type: theoretical" in prompt
        assert "- Academic Field: formal sciences" in prompt
        assert "totalScore must never exceed 10.0" in prompt
        assert '"maxScore": 4,' in prompt
        assert abstract in prompt

    def test_field_label(self):
        """Test that hyphenated fields are shown with spaces."""
        assert field_label(AcademicField.SOCIAL_SCIENCES) == "social sciences"


class TestSelectPrompt:
    """Test cases for choosing between the two prompt forms."""

    def _select(self, text, abstract=None):
        framework = get_framework_guidelines(DocumentType.THEORETICAL, AcademicField.FORMAL_SCIENCES)
        return select_prompt("Title", text, abstract, DocumentType.THEORETICAL,
                             AcademicField.FORMAL_SCIENCES, framework)

    def test_short_text_uses_abstract_prompt(self):
        """Test that a 200 character text selects the abstract-only prompt."""
        prompt = self._select("t" * 200)
        assert "Assessment is based on abstract only." in prompt
        assert "t" * 200 in prompt

    def test_threshold_is_exclusive(self):
        """Test that exactly FULL_TEXT_THRESHOLD characters is still abstract-only."""
        prompt = self._select("t" * FULL_TEXT_THRESHOLD)
        assert "Assessment is based on abstract only." in prompt

    def test_long_text_uses_full_prompt(self):
        """Test that texts longer than the threshold select the full-text prompt."""
        prompt = self._select("t" * (FULL_TEXT_THRESHOLD + 1))
        assert "DOCUMENT TEXT:" in prompt
        assert "Assessment is based on abstract only." not in prompt

    def test_abstract_preferred_over_short_text(self):
        """Test that a supplied abstract is used in place of a short text."""
        prompt = self._select("short", abstract="The real abstract.")
        assert "The real abstract." in prompt

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text(self, text):
        """Test that empty text still produces an abstract-only prompt."""
        prompt = self._select(text, abstract="Only an abstract.")
        assert "Only an abstract." in prompt
