"""Shared fixtures for the test suite."""

import pytest

from research_credibility_analyzer.models import (
    AcademicField,
    AnalysisResult,
    BiasAnalysis,
    CredibilityRating,
    CredibilityScore,
    DocumentType,
    Paper,
)


@pytest.fixture
def make_result():
    """Factory for AnalysisResult instances with sensible defaults."""
    def _make(paper_id="W1", total_score=7.0, max_total_score=10.0,
              rating=CredibilityRating.MODERATE, bias_level="Low",
              document_type=DocumentType.ARTICLE, field=AcademicField.MEDICAL):
        return AnalysisResult(
            paper=Paper(id=paper_id, title=f"Paper {paper_id}", authors=["A. Author"],
                        document_type=document_type, field=field, year=2023),
            credibility=CredibilityScore(total_score=total_score, max_total_score=max_total_score,
                                         rating=rating),
            bias=BiasAnalysis(overall_level=bias_level),
            timestamp="2024-01-01T00:00:00+00:00",
        )
    return _make
