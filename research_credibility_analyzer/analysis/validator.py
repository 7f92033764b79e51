"""Validation and normalization of LLM assessment replies."""

import json
import logging
from typing import Any, Dict, NamedTuple, Optional

from pydantic import ValidationError

from ..errors import ParseError, SchemaError
from ..models import (BiasAnalysis, CredibilityRating, CredibilityScore,
                      FrameworkGuidelines, KeyFindings, ResearchPerspective)

logger = logging.getLogger(__name__)

# (fraction of max weight, rating); first band reached wins.
RATING_BANDS = [
    (0.90, CredibilityRating.EXEMPLARY),
    (0.75, CredibilityRating.STRONG),
    (0.50, CredibilityRating.MODERATE),
    (0.25, CredibilityRating.WEAK),
]


class AnalysisPayload(NamedTuple):
    credibility: CredibilityScore
    bias: BiasAnalysis
    key_findings: KeyFindings
    perspective: ResearchPerspective


def rating_for_score(total_score: float, max_weight: float) -> CredibilityRating:
    """Map a total score to its rating band relative to max_weight."""
    for fraction, rating in RATING_BANDS:
        if total_score >= max_weight * fraction:
            return rating
    if total_score > 0:
        return CredibilityRating.VERY_POOR
    return CredibilityRating.INVALID


def extract_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse the first balanced {...} span in raw_text.

    The scanner tracks string literals so braces inside JSON strings do not
    affect the balance. Raises ParseError when no span is found or it is not valid JSON.
    """
    start = raw_text.find("{") if raw_text else -1
    if start == -1:
        logger.error(f"Could not extract JSON from response: {(raw_text or '')[:500]}")
        raise ParseError("Failed to parse analysis response: no JSON object found")

    depth = 0
    in_string = False
    escaped = False
    end = None
    for i in range(start, len(raw_text)):
        ch = raw_text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                end = i
                break

    if end is None:
        logger.error(f"Unbalanced JSON object in response: {raw_text[start:start + 500]}")
        raise ParseError("Failed to parse analysis response: unbalanced JSON object")

    try:
        parsed = json.loads(raw_text[start:end + 1])
    except json.JSONDecodeError as e:
        logger.error(f"JSON parsing error: {e}")
        raise ParseError(f"Failed to parse analysis response: {e}") from e
    return parsed


def _coerce_rating(value: Any) -> Optional[CredibilityRating]:
    """Match a rating label case-insensitively; None when it is not one of the bands."""
    if isinstance(value, CredibilityRating):
        return value
    if not isinstance(value, str):
        return None
    label = " ".join(value.split()).lower()
    for rating in CredibilityRating:
        if rating.value.lower() == label:
            return rating
    return None


def _normalize_credibility(data: Dict[str, Any], framework: FrameworkGuidelines,
                           always_recompute_rating: bool) -> CredibilityScore:
    credibility = data.get("credibility")
    if not isinstance(credibility, dict):
        logger.error(f"Missing credibility data in analysis response: {str(data)[:500]}")
        raise SchemaError("Invalid analysis response: missing credibility assessment")

    # A totalScore of 0 is a real score; only absence or null counts as missing.
    if credibility.get("totalScore", credibility.get("total_score")) is None:
        logger.error(f"Missing totalScore in credibility data: {str(credibility)[:500]}")
        raise SchemaError("Invalid analysis response: missing credibility totalScore")

    # The rating is resolved below, after the score is known to be in bounds.
    credibility = dict(credibility)
    raw_rating = credibility.pop("rating", None)

    try:
        score = CredibilityScore.model_validate(credibility)
    except ValidationError as e:
        raise SchemaError(f"Invalid analysis response: malformed credibility data ({e.error_count()} errors)") from e

    max_weight = framework.weights.total
    updates: Dict[str, Any] = {"max_total_score": max_weight}

    if score.total_score > max_weight:
        logger.warning(
            f"[Score Validation] Credibility score {score.total_score:.2f} exceeds maximum weight "
            f"{max_weight:.2f}. Capping to maximum."
        )
        updates["total_score"] = max_weight
        updates["rating"] = rating_for_score(max_weight, max_weight)
    elif always_recompute_rating or raw_rating is None:
        updates["rating"] = rating_for_score(score.total_score, max_weight)
    else:
        rating = _coerce_rating(raw_rating)
        if rating is None:
            rating = rating_for_score(score.total_score, max_weight)
            logger.warning(f"[Score Validation] Unrecognized rating {raw_rating!r}; "
                           f"derived {rating.value} from the score.")
        updates["rating"] = rating

    return score.model_copy(update=updates)


def validate_response(raw_text: str, framework: FrameworkGuidelines,
                      always_recompute_rating: bool = False) -> CredibilityScore:
    """Validate a provider reply and return its normalized credibility score.

    Within bounds, the model's own rating is kept unless
    always_recompute_rating is set; on overflow the total is clamped to the
    framework's weight sum and the rating is re-derived.
    """
    data = extract_json_object(raw_text)
    return _normalize_credibility(data, framework, always_recompute_rating)


def _section(data: Dict[str, Any], key: str, model):
    value = data.get(key)
    if value is None:
        logger.warning(f"Analysis response has no '{key}' section; using empty defaults.")
        return model()
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise SchemaError(f"Invalid analysis response: malformed '{key}' section ({e.error_count()} errors)") from e


def parse_analysis_payload(raw_text: str, framework: FrameworkGuidelines,
                           always_recompute_rating: bool = False) -> AnalysisPayload:
    """Validate credibility and parse the bias, key findings and perspective sections."""
    data = extract_json_object(raw_text)
    credibility = _normalize_credibility(data, framework, always_recompute_rating)
    return AnalysisPayload(
        credibility=credibility,
        bias=_section(data, "bias", BiasAnalysis),
        key_findings=_section(data, "keyFindings", KeyFindings),
        perspective=_section(data, "perspective", ResearchPerspective),
    )
