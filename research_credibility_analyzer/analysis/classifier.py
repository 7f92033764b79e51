"""Keyword-based classification of document type and academic field."""

import logging
import re
from typing import Dict, List, Tuple

from ..models import AcademicField, DocumentType

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 3
BODY_MATCH_CAP = 10
MIN_TYPE_SCORE = 3
MIN_FIELD_SCORE = 4


DOCUMENT_TYPE_KEYWORDS: Dict[DocumentType, List[str]] = {
    DocumentType.DISSERTATION: [
        "dissertation", "thesis", "doctor of philosophy", "in partial fulfillment",
        "partial fulfilment", "master of science", "doctoral", "supervisor", "committee members",
    ],
    DocumentType.PROPOSAL: [
        "research proposal", "proposal", "proposed research", "proposed study",
        "specific aims", "work plan", "timeline", "budget justification", "we propose",
    ],
    DocumentType.REVIEW: [
        "literature review", "systematic review", "meta-analysis", "scoping review",
        "narrative review", "review of the literature", "prisma", "we reviewed",
    ],
    DocumentType.CASE_STUDY: [
        "case study", "case report", "case studies", "single case", "this case",
    ],
    DocumentType.CONFERENCE: [
        "proceedings", "conference", "symposium", "workshop", "annual meeting",
    ],
    DocumentType.PREPRINT: [
        "preprint", "arxiv", "biorxiv", "medrxiv", "ssrn", "not peer reviewed",
        "not yet peer-reviewed",
    ],
    DocumentType.THEORETICAL: [
        "theorem", "lemma", "proof", "corollary", "conceptual framework",
        "theoretical framework", "we formalize", "axiom",
    ],
    DocumentType.ESSAY: [
        "essay", "i argue", "this essay", "commentary", "opinion", "perspective piece",
    ],
    DocumentType.BOOK: [
        "chapter", "isbn", "preface", "foreword", "table of contents", "publisher", "edition",
    ],
    DocumentType.ARTICLE: [
        "abstract", "introduction", "methods", "methodology", "results", "discussion",
        "participants", "we found", "journal",
    ],
    DocumentType.UNKNOWN: [],
}

# Tie-break order: earlier wins. Specific genres before the generic article, unknown last.
DOCUMENT_TYPE_PRIORITY: List[DocumentType] = [
    DocumentType.DISSERTATION,
    DocumentType.PROPOSAL,
    DocumentType.REVIEW,
    DocumentType.CASE_STUDY,
    DocumentType.CONFERENCE,
    DocumentType.PREPRINT,
    DocumentType.THEORETICAL,
    DocumentType.ESSAY,
    DocumentType.BOOK,
    DocumentType.ARTICLE,
    DocumentType.UNKNOWN,
]


ACADEMIC_FIELD_KEYWORDS: Dict[AcademicField, List[str]] = {
    AcademicField.MEDICAL: [
        "patient", "patients", "clinical", "clinical trial", "disease", "treatment",
        "hospital", "therapy", "diagnosis", "randomized controlled", "placebo",
        "mortality", "medicine", "cohort", "epidemiology",
    ],
    AcademicField.AGRICULTURAL: [
        "crop", "crops", "soil", "yield", "livestock", "agriculture", "agricultural",
        "farm", "farmers", "irrigation", "fertilizer", "cultivar", "harvest",
    ],
    AcademicField.ENGINEERING: [
        "engineering", "prototype", "circuit", "design", "manufacturing", "sensor",
        "control system", "mechanical", "electrical", "structural", "robot", "robotics",
        "software", "finite element",
    ],
    AcademicField.FORMAL_SCIENCES: [
        "theorem", "lemma", "proof", "algorithm", "mathematics", "mathematical",
        "algebra", "topology", "logic", "statistics", "computability", "complexity",
        "corollary", "axiom",
    ],
    AcademicField.NATURAL_SCIENCES: [
        "physics", "chemistry", "biology", "molecule", "molecular", "cell", "cells",
        "species", "quantum", "experiment", "ecosystem", "protein", "genome",
        "astronomy", "geology", "particle",
    ],
    AcademicField.SOCIAL_SCIENCES: [
        "survey", "respondents", "interview", "interviews", "society", "social",
        "economic", "economics", "policy", "political", "psychology", "sociology",
        "education", "behavior", "behaviour",
    ],
    AcademicField.HUMANITIES: [
        "history", "historical", "philosophy", "literature", "literary", "poetry",
        "novel", "art", "religion", "linguistics", "culture", "cultural",
        "archive", "manuscript",
    ],
    AcademicField.INTERDISCIPLINARY: [],
}

FIELD_PRIORITY: List[AcademicField] = [
    AcademicField.MEDICAL,
    AcademicField.AGRICULTURAL,
    AcademicField.ENGINEERING,
    AcademicField.FORMAL_SCIENCES,
    AcademicField.NATURAL_SCIENCES,
    AcademicField.SOCIAL_SCIENCES,
    AcademicField.HUMANITIES,
    AcademicField.INTERDISCIPLINARY,
]


def _compile(keywords: List[str]) -> List[re.Pattern]:
    return [re.compile(r"\b" + re.escape(k.lower()) + r"\b") for k in keywords]


_TYPE_PATTERNS = {t: _compile(kws) for t, kws in DOCUMENT_TYPE_KEYWORDS.items()}
_FIELD_PATTERNS = {f: _compile(kws) for f, kws in ACADEMIC_FIELD_KEYWORDS.items()}


def _signal_score(patterns: List[re.Pattern], title_lower: str, text_lower: str) -> int:
    """Title hits count TITLE_WEIGHT each; body hits count once, capped per keyword."""
    score = 0
    for pattern in patterns:
        score += TITLE_WEIGHT * len(pattern.findall(title_lower))
        if text_lower:
            score += min(len(pattern.findall(text_lower)), BODY_MATCH_CAP)
    return score


def _pick(scores: Dict, priority: List, minimum: int, default):
    best = default
    best_score = 0
    for candidate in priority:
        score = scores.get(candidate, 0)
        if score > best_score:
            best, best_score = candidate, score
    if best_score < minimum:
        return default
    return best


def classify_document_type(text: str, title: str) -> DocumentType:
    """Classify the genre of a document; falls back to UNKNOWN on weak signal."""
    title_lower = (title or "").lower()
    text_lower = text.lower() if text and text.strip() else ""
    scores = {t: _signal_score(p, title_lower, text_lower) for t, p in _TYPE_PATTERNS.items()}
    matched = {t.value: s for t, s in scores.items() if s}
    logger.debug(f"Document type scores: {matched}")
    return _pick(scores, DOCUMENT_TYPE_PRIORITY, MIN_TYPE_SCORE, DocumentType.UNKNOWN)


def classify_academic_field(text: str, title: str) -> AcademicField:
    """Classify the disciplinary field of a document.

    Without body text there is too little evidence for a field, so the
    result is INTERDISCIPLINARY regardless of the title.
    """
    if not text or not text.strip():
        return AcademicField.INTERDISCIPLINARY
    title_lower = (title or "").lower()
    text_lower = text.lower()
    scores = {f: _signal_score(p, title_lower, text_lower) for f, p in _FIELD_PATTERNS.items()}
    matched = {f.value: s for f, s in scores.items() if s}
    logger.debug(f"Academic field scores: {matched}")
    return _pick(scores, FIELD_PRIORITY, MIN_FIELD_SCORE, AcademicField.INTERDISCIPLINARY)


def classify(text: str, title: str) -> Tuple[DocumentType, AcademicField]:
    """Classify a document into (DocumentType, AcademicField)."""
    document_type = classify_document_type(text, title)
    field = classify_academic_field(text, title)
    logger.info(f"Document classified as: {document_type.value} in {field.value}")
    return document_type, field
