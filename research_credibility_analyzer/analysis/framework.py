"""Adaptive assessment framework: weights, focus areas and bias priorities per document type and field."""

import logging
from functools import lru_cache
from typing import Dict, List

from ..models import AcademicField, DocumentType, FrameworkGuidelines, FrameworkWeights

logger = logging.getLogger(__name__)

TOTAL_WEIGHT = 10.0


def _weights(rigor, transparency, sources, authors, statistics, logic) -> FrameworkWeights:
    return FrameworkWeights(
        methodological_rigor=rigor,
        data_transparency=transparency,
        source_quality=sources,
        author_credibility=authors,
        statistical_validity=statistics,
        logical_consistency=logic,
    )


# Numeric maxima depend on the document type only. Each row sums to TOTAL_WEIGHT.
TYPE_WEIGHTS: Dict[DocumentType, FrameworkWeights] = {
    DocumentType.ARTICLE: _weights(2.5, 2.0, 1.5, 1.0, 2.0, 1.0),
    DocumentType.REVIEW: _weights(1.5, 1.0, 3.0, 1.5, 1.0, 2.0),
    DocumentType.BOOK: _weights(1.0, 1.0, 2.5, 2.5, 0.5, 2.5),
    DocumentType.DISSERTATION: _weights(2.5, 2.0, 1.5, 1.0, 1.5, 1.5),
    DocumentType.PROPOSAL: _weights(3.0, 1.0, 2.0, 1.5, 1.0, 1.5),
    DocumentType.CASE_STUDY: _weights(2.5, 2.5, 1.5, 1.0, 0.5, 2.0),
    DocumentType.ESSAY: _weights(0.5, 0.5, 3.0, 1.5, 0.5, 4.0),
    DocumentType.THEORETICAL: _weights(1.0, 0.5, 2.0, 1.5, 1.0, 4.0),
    DocumentType.PREPRINT: _weights(2.5, 2.0, 1.5, 1.5, 1.5, 1.0),
    DocumentType.CONFERENCE: _weights(2.5, 1.5, 1.5, 1.5, 1.5, 1.5),
    DocumentType.UNKNOWN: _weights(2.0, 1.5, 1.5, 1.5, 1.5, 2.0),
}

TYPE_FOCUS: Dict[DocumentType, List[str]] = {
    DocumentType.ARTICLE: [
        "Appropriateness of study design for the research question",
        "Reproducibility of methods and availability of data",
        "Statistical analysis and reporting of effect sizes",
    ],
    DocumentType.REVIEW: [
        "Search strategy and inclusion/exclusion criteria",
        "Quality appraisal of included studies",
        "Synthesis method and handling of heterogeneity",
    ],
    DocumentType.BOOK: [
        "Author expertise and scholarly standing",
        "Breadth and balance of sources",
        "Coherence of the overall argument across chapters",
    ],
    DocumentType.DISSERTATION: [
        "Originality of the research contribution",
        "Rigor and documentation of methods",
        "Depth of the literature review",
    ],
    DocumentType.PROPOSAL: [
        "Feasibility of the proposed methodology",
        "Strength of preliminary evidence",
        "Realism of timeline and resources",
    ],
    DocumentType.CASE_STUDY: [
        "Justification of case selection",
        "Triangulation of data sources",
        "Transferability of insights beyond the case",
    ],
    DocumentType.ESSAY: [
        "Coherence and structure of the argument",
        "Use of supporting sources",
        "Engagement with counterarguments",
    ],
    DocumentType.THEORETICAL: [
        "Internal logical consistency",
        "Conceptual clarity of definitions",
        "Falsifiability and testable implications",
    ],
    DocumentType.PREPRINT: [
        "Preliminary validation of claims",
        "Clarity about peer review status",
        "Author track record in the area",
    ],
    DocumentType.CONFERENCE: [
        "Novelty of the contribution",
        "Adequacy of evaluation given page limits",
        "Selectivity of the venue",
    ],
    DocumentType.UNKNOWN: [
        "Identification of authors and provenance",
        "Substantiation of claims with evidence",
        "Logical coherence of the text",
    ],
}

FIELD_FOCUS: Dict[AcademicField, List[str]] = {
    AcademicField.NATURAL_SCIENCES: [
        "Experimental controls and measurement calibration",
        "Replicability of results",
    ],
    AcademicField.ENGINEERING: [
        "Technical feasibility and design justification",
        "Safety and scalability considerations",
    ],
    AcademicField.MEDICAL: [
        "Randomization, blinding and ethical approval",
        "Clinical significance beyond statistical significance",
    ],
    AcademicField.AGRICULTURAL: [
        "Representation of environmental and seasonal variation",
        "Plot or sample size adequacy",
    ],
    AcademicField.SOCIAL_SCIENCES: [
        "Sampling representativeness",
        "Validity of self-reported measures",
    ],
    AcademicField.HUMANITIES: [
        "Source authenticity and provenance",
        "Interpretive grounding in primary evidence",
    ],
    AcademicField.FORMAL_SCIENCES: [
        "Completeness of proofs",
        "Justification of axioms and assumptions",
    ],
    AcademicField.INTERDISCIPLINARY: [
        "Integration of methods across disciplines",
        "Clarity of disciplinary assumptions",
    ],
}

FIELD_BIASES: Dict[AcademicField, List[str]] = {
    AcademicField.NATURAL_SCIENCES: ["Measurement bias", "Publication bias", "Confirmation bias"],
    AcademicField.ENGINEERING: ["Funding bias", "Reporting bias", "Selection bias"],
    AcademicField.MEDICAL: ["Selection bias", "Funding bias", "Reporting bias", "Publication bias"],
    AcademicField.AGRICULTURAL: ["Selection bias", "Measurement bias", "Funding bias"],
    AcademicField.SOCIAL_SCIENCES: ["Selection bias", "Demographic bias", "Confirmation bias"],
    AcademicField.HUMANITIES: ["Confirmation bias", "Citation bias", "Demographic bias"],
    AcademicField.FORMAL_SCIENCES: ["Confirmation bias", "Citation bias"],
    AcademicField.INTERDISCIPLINARY: ["Confirmation bias", "Selection bias", "Citation bias"],
}

TYPE_EXTRA_BIASES: Dict[DocumentType, List[str]] = {
    DocumentType.REVIEW: ["Publication bias", "Citation bias"],
    DocumentType.PREPRINT: ["Publication bias"],
    DocumentType.PROPOSAL: ["Funding bias"],
    DocumentType.ESSAY: ["Confirmation bias"],
}


@lru_cache(maxsize=None)
def get_framework_guidelines(document_type: DocumentType, field: AcademicField) -> FrameworkGuidelines:
    """Return the scoring framework for a (document type, field) pair.

    Total over all pairs: anything not tabulated falls back to the
    UNKNOWN / INTERDISCIPLINARY rows.
    """
    document_type = DocumentType(document_type)
    field = AcademicField(field)
    weights = TYPE_WEIGHTS.get(document_type, TYPE_WEIGHTS[DocumentType.UNKNOWN])
    type_focus = TYPE_FOCUS.get(document_type, TYPE_FOCUS[DocumentType.UNKNOWN])
    field_focus = FIELD_FOCUS.get(field, FIELD_FOCUS[AcademicField.INTERDISCIPLINARY])

    biases = list(FIELD_BIASES.get(field, FIELD_BIASES[AcademicField.INTERDISCIPLINARY]))
    for extra in TYPE_EXTRA_BIASES.get(document_type, []):
        if extra not in biases:
            biases.append(extra)

    return FrameworkGuidelines(
        document_type=document_type,
        field=field,
        weights=weights,
        assessment_focus=tuple(type_focus + field_focus),
        bias_priorities=tuple(biases),
    )


def max_weight(framework: FrameworkGuidelines) -> float:
    """Sum of the six weight maxima, i.e. the highest achievable total score."""
    return framework.weights.total
