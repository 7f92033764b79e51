"""Tests for research_credibility_analyzer.analysis.classifier module."""

import pytest

from research_credibility_analyzer.analysis.classifier import (
    BODY_MATCH_CAP,
    _FIELD_PATTERNS,
    _signal_score,
    classify,
    classify_academic_field,
    classify_document_type,
)
from research_credibility_analyzer.models import AcademicField, DocumentType


CLINICAL_TITLE = "Randomized controlled trial of drug X in patients with hypertension"
CLINICAL_TEXT = (
    "Methods: 200 patients were enrolled in a clinical trial. "
    "Results: treatment reduced mortality compared with placebo. "
    "Discussion: the effect persisted at twelve months."
)


class TestClassifyDocumentType:
    """Test cases for document type classification."""

    def test_dissertation_title_and_front_matter(self):
        """Test that thesis front matter is recognized as a dissertation."""
        text = ("Submitted in partial fulfillment of the requirements for the degree of "
                "Doctor of Philosophy. This thesis examines soil carbon.")
        assert classify_document_type(text, "Soil Carbon Dynamics: A Dissertation") == DocumentType.DISSERTATION

    def test_generic_article_structure(self):
        """Test that IMRaD section headings classify as an article."""
        assert classify_document_type(CLINICAL_TEXT, CLINICAL_TITLE) == DocumentType.ARTICLE

    def test_title_only_review(self):
        """Test classification from the title alone when text is empty."""
        assert classify_document_type("", "A Systematic Review of Soil Studies") == DocumentType.REVIEW

    def test_weak_signal_is_unknown(self):
        """Test that text without genre keywords falls back to unknown."""
        assert classify_document_type("hello world", "Notes") == DocumentType.UNKNOWN

    def test_tie_resolved_by_priority(self):
        """Test that equal scores resolve to the earlier genre in priority order."""
        assert classify_document_type("", "Proceedings preprint") == DocumentType.CONFERENCE

    def test_case_insensitive(self):
        """Test that keyword matching ignores case."""
        assert classify_document_type("", "A CASE STUDY of Flood Response") == DocumentType.CASE_STUDY


class TestClassifyAcademicField:
    """Test cases for academic field classification."""

    def test_medical_field(self):
        """Test clinical vocabulary maps to the medical field."""
        assert classify_academic_field(CLINICAL_TEXT, CLINICAL_TITLE) == AcademicField.MEDICAL

    def test_agricultural_field(self):
        """Test agronomy vocabulary maps to the agricultural field."""
        text = "We measured crop yield under irrigation and fertilizer treatments on the farm."
        assert classify_academic_field(text, "Soil management") == AcademicField.AGRICULTURAL

    @pytest.mark.parametrize("text", ["", "   \n\t "])
    def test_empty_text_is_interdisciplinary(self, text):
        """Test that empty text yields interdisciplinary regardless of the title."""
        assert classify_academic_field(text, "Clinical trial of patients in hospital") == \
            AcademicField.INTERDISCIPLINARY

    def test_weak_signal_is_interdisciplinary(self):
        """Test that a single stray keyword is not enough to pick a field."""
        assert classify_academic_field("A short note on history.", "Notes") == AcademicField.INTERDISCIPLINARY

    def test_word_boundaries(self):
        """Test that keywords do not match inside longer words."""
        text = "start restart startup party partial " * 10
        assert classify_academic_field(text, "") == AcademicField.INTERDISCIPLINARY


class TestSignalScore:
    """Test cases for the keyword scoring helper."""

    def test_body_matches_are_capped(self):
        """Test that repeated body matches of one keyword are capped."""
        patterns = _FIELD_PATTERNS[AcademicField.MEDICAL]
        score = _signal_score(patterns, "", "patient " * 50)
        assert score == BODY_MATCH_CAP

    def test_title_matches_outweigh_body(self):
        """Test that a title hit counts more than a body hit."""
        patterns = _FIELD_PATTERNS[AcademicField.MEDICAL]
        assert _signal_score(patterns, "hospital", "") > _signal_score(patterns, "", "hospital")


class TestClassify:
    """Test cases for the combined classify function."""

    def test_returns_type_and_field(self):
        """Test that classify returns both dimensions."""
        assert classify(CLINICAL_TEXT, CLINICAL_TITLE) == (DocumentType.ARTICLE, AcademicField.MEDICAL)

    def test_deterministic(self):
        """Test that identical inputs always give identical outputs."""
        results = {classify(CLINICAL_TEXT, CLINICAL_TITLE) for _ in range(5)}
        assert len(results) == 1

    def test_empty_text_uses_title_for_type_only(self):
        """Test the empty-text edge case: type from title, field interdisciplinary."""
        assert classify("", "A Systematic Review of Soil Studies") == \
            (DocumentType.REVIEW, AcademicField.INTERDISCIPLINARY)
