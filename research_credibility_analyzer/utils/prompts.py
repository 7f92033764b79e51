"""Prompt construction for credibility assessment."""

import logging
from typing import Dict, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict

from ..analysis.framework import get_framework_guidelines
from ..models import AcademicField, DocumentType, FrameworkGuidelines

logger = logging.getLogger(__name__)

FULL_TEXT_THRESHOLD = 1000
MAX_DOCUMENT_CHARS = 150000
CONTINUATION_MARKER = "[... document continues ...]"

SYSTEM_PROMPT = (
    "You are an expert research analyst specializing in adaptive assessment frameworks. "
    "Analyze research documents and return valid JSON responses only. "
    "Do not include any text before or after the JSON."
)


class TypeDescription(NamedTuple):
    name: str
    category: str
    description: str
    priorities: str


DOCUMENT_TYPE_DESCRIPTIONS: Dict[DocumentType, TypeDescription] = {
    DocumentType.ARTICLE: TypeDescription(
        "Research Article", "publication",
        "Peer-reviewed original research with methods, results, and discussion",
        "methodological rigor, statistical validity, data transparency, and peer review status"),
    DocumentType.REVIEW: TypeDescription(
        "Literature Review", "synthesis",
        "Comprehensive synthesis of published research on a topic",
        "source quality, comprehensiveness, synthesis methodology, and author expertise"),
    DocumentType.BOOK: TypeDescription(
        "Book", "monograph",
        "Extended scholarly work, typically comprehensive treatment of a topic",
        "author credibility, logical coherence, comprehensiveness, and evidence quality"),
    DocumentType.DISSERTATION: TypeDescription(
        "Dissertation/Thesis", "academic work",
        "Original research submitted for degree requirement",
        "methodological rigor, research novelty, advisor quality, and ethical compliance"),
    DocumentType.PROPOSAL: TypeDescription(
        "Research Proposal", "prospective work",
        "Plan for future research with proposed methodology",
        "feasibility, preliminary evidence, timeline realism, and innovation"),
    DocumentType.CASE_STUDY: TypeDescription(
        "Case Study", "empirical work",
        "In-depth analysis of specific case(s) or situation(s)",
        "case selection justification, triangulation, researcher reflexivity, and data quality"),
    DocumentType.ESSAY: TypeDescription(
        "Essay", "argumentative work",
        "Author's perspective and argument on a topic",
        "logical argument coherence, source quality, acknowledgment of opposing views"),
    DocumentType.THEORETICAL: TypeDescription(
        "Theoretical Work", "conceptual work",
        "Development or critique of theory without empirical data",
        "logical consistency, theoretical coherence, conceptual clarity, and falsifiability"),
    DocumentType.PREPRINT: TypeDescription(
        "Preprint", "preliminary publication",
        "Manuscript shared before peer review",
        "preliminary validation, author track record, clarity of peer review status"),
    DocumentType.CONFERENCE: TypeDescription(
        "Conference Paper", "conference contribution",
        "Research presented at academic conference",
        "conference selectivity, peer review rigor, preliminary nature, and innovation"),
    DocumentType.UNKNOWN: TypeDescription(
        "Unknown Document", "unidentified work",
        "Document type could not be determined",
        "format completeness, author identification, claims substantiation, logical coherence"),
}

FIELD_GUIDANCE: Dict[AcademicField, str] = {
    AcademicField.NATURAL_SCIENCES: """
FOR NATURAL SCIENCES:
- Emphasize reproducibility and experimental design rigor
- Assess measurement instrument calibration and validity
- Evaluate statistical power for sample sizes
- Check for control of confounding variables
- Consider generalizability across conditions""",
    AcademicField.ENGINEERING: """
FOR ENGINEERING:
- Prioritize technical feasibility and design justification
- Assess scalability from laboratory to real-world application
- Evaluate cost-benefit analysis completeness
- Check for safety and risk assessment
- Consider practical implementation constraints""",
    AcademicField.MEDICAL: """
FOR MEDICAL RESEARCH:
- Prioritize patient safety and ethical compliance
- Assess statistical power for clinical significance
- Evaluate blinding and randomization adequacy
- Check for adverse event reporting completeness
- Consider conflict of interest and funding source""",
    AcademicField.AGRICULTURAL: """
FOR AGRICULTURAL RESEARCH:
- Emphasize environmental condition representation
- Assess seasonal and regional variation handling
- Evaluate sample/plot size appropriateness
- Check for economic feasibility consideration
- Consider sustainability implications""",
    AcademicField.SOCIAL_SCIENCES: """
FOR SOCIAL SCIENCES:
- Prioritize sampling representativeness
- Assess self-report validity and social desirability bias
- Evaluate context adequacy for generalizing
- Check for alternative explanation consideration
- Consider cultural sensitivity and bias awareness""",
    AcademicField.HUMANITIES: """
FOR HUMANITIES:
- Emphasize interpretive coherence and evidence grounding
- Assess source authenticity and provenance
- Evaluate scholarly apparatus (citations, references)
- Check for awareness of own interpretive biases
- Consider historiographical appropriateness""",
    AcademicField.FORMAL_SCIENCES: """
FOR FORMAL SCIENCES:
- Prioritize logical proof completeness
- Assess axiom adequacy and justification
- Evaluate assumption clarity and necessity
- Check for generalizability claims appropriateness
- Consider practical computational implications""",
    AcademicField.INTERDISCIPLINARY: """
FOR INTERDISCIPLINARY WORK:
- Evaluate integration quality across disciplines
- Assess method appropriateness for combined fields
- Check for disciplinary tension resolution
- Consider whether interdisciplinary approach adds value
- Assess clarity of disciplinary assumptions""",
}


class PromptContext(BaseModel):
    """Inputs for the full-text assessment prompt."""
    model_config = ConfigDict(frozen=True)

    document_title: Optional[str] = None
    document_type: DocumentType
    field: AcademicField
    framework: FrameworkGuidelines
    full_text: str
    abstract: Optional[str] = None


def get_document_type_description(document_type: DocumentType) -> TypeDescription:
    return DOCUMENT_TYPE_DESCRIPTIONS.get(document_type, DOCUMENT_TYPE_DESCRIPTIONS[DocumentType.UNKNOWN])


def get_field_guidance(field: AcademicField) -> str:
    return FIELD_GUIDANCE.get(field, FIELD_GUIDANCE[AcademicField.INTERDISCIPLINARY])


def field_label(field: AcademicField) -> str:
    return AcademicField(field).value.replace("-", " ")


def _num(value: float) -> str:
    """Render a weight the way it is shown to the model: 2.5 -> '2.5', 2.0 -> '2'."""
    return f"{value:g}"


def truncate_document(text: str) -> str:
    """Cap the document at MAX_DOCUMENT_CHARS, appending the continuation marker when cut."""
    marker = CONTINUATION_MARKER if len(text) > MAX_DOCUMENT_CHARS else ""
    return f"{text[:MAX_DOCUMENT_CHARS]} {marker}"


def render_json_schema(framework: FrameworkGuidelines, title: str, article_type: str) -> str:
    """JSON structure the model must emit, with per-component maxima filled in."""
    w = framework.weights
    total = f"{w.total:.1f}"
    return f"""{{
  "credibility": {{
    "methodologicalRigor": {{
      "score": <0-{_num(w.methodological_rigor)}>,
      "maxScore": {_num(w.methodological_rigor)},
      "description": "<brief explanation of methodology assessment>",
      "evidence": ["<specific evidence 1>", "<specific evidence 2>"]
    }},
    "dataTransparency": {{
      "score": <0-{_num(w.data_transparency)}>,
      "maxScore": {_num(w.data_transparency)},
      "description": "<explanation>",
      "evidence": ["<evidence 1>", "<evidence 2>"]
    }},
    "sourceQuality": {{
      "score": <0-{_num(w.source_quality)}>,
      "maxScore": {_num(w.source_quality)},
      "description": "<explanation>",
      "evidence": ["<evidence 1>"]
    }},
    "authorCredibility": {{
      "score": <0-{_num(w.author_credibility)}>,
      "maxScore": {_num(w.author_credibility)},
      "description": "<explanation>",
      "evidence": ["<evidence 1>"]
    }},
    "statisticalValidity": {{
      "score": <0-{_num(w.statistical_validity)}>,
      "maxScore": {_num(w.statistical_validity)},
      "description": "<explanation>",
      "evidence": ["<evidence 1>"]
    }},
    "logicalConsistency": {{
      "score": <0-{_num(w.logical_consistency)}>,
      "maxScore": {_num(w.logical_consistency)},
      "description": "<explanation>",
      "evidence": ["<evidence 1>"]
    }},
    "totalScore": <sum of above scores, should not exceed {total}>,
    "rating": "<Exemplary|Strong|Moderate|Weak|Very Poor|Invalid>"
  }},
  "bias": {{
    "biases": [
      {{
        "type": "<Selection|Confirmation|Publication|Reporting|Funding|Citation|Demographic|Measurement>",
        "evidence": "<specific evidence from document>",
        "severity": "<Low|Medium|High>"
      }}
    ],
    "overallLevel": "<Low|Medium|High>",
    "justification": "<synthesis of identified biases>"
  }},
  "keyFindings": {{
    "fundamentals": {{
      "title": "{title}",
      "authors": ["<author1>", "<author2>"],
      "journal": "<journal name or publisher>",
      "doi": "<DOI if available>",
      "publicationDate": "<YYYY-MM-DD>",
      "articleType": "{article_type}"
    }},
    "researchQuestion": "<main research question>",
    "hypothesis": "<stated hypothesis if present>",
    "methodology": {{
      "studyDesign": "<design type>",
      "sampleSize": "<sample size if applicable>",
      "population": "<target population>",
      "samplingMethod": "<how subjects/samples selected>",
      "setting": "<research setting>",
      "intervention": "<intervention if applicable>",
      "comparisonGroups": "<comparison groups if any>",
      "outcomesMeasures": ["<outcome 1>", "<outcome 2>"],
      "statisticalMethods": ["<method 1>", "<method 2>"],
      "studyDuration": "<duration or timeframe>"
    }},
    "findings": {{
      "primaryFindings": ["<finding 1>", "<finding 2>"],
      "secondaryFindings": ["<finding 1>"],
      "effectSizes": ["<effect size 1>"],
      "clinicalSignificance": "<practical significance assessment>",
      "unexpectedFindings": ["<unexpected result 1>"]
    }},
    "limitations": {{
      "authorAcknowledged": ["<limitation 1>", "<limitation 2>"],
      "methodologicalIdentified": ["<identified limitation 1>"],
      "severity": "<Minor|Moderate|Major>"
    }},
    "conclusions": {{
      "primaryConclusion": "<main conclusion stated>",
      "supportedByData": <true|false>,
      "practicalImplications": ["<implication 1>", "<implication 2>"],
      "futureResearchNeeded": ["<gap 1>", "<gap 2>"],
      "recommendations": ["<recommendation 1>"],
      "generalizability": "<assessment of generalizability>"
    }}
  }},
  "perspective": {{
    "theoreticalFramework": "<theoretical framework used>",
    "paradigm": "<Positivist|Interpretivist|Critical|Pragmatic>",
    "disciplinaryPerspective": "<disciplinary tradition>",
    "epistemologicalStance": "<how knowledge is defined>",
    "assumptions": {{
      "stated": ["<stated assumption 1>"],
      "unstated": ["<unstated assumption 1>"]
    }},
    "ideologicalPosition": "<any ideological stance detected>",
    "authorReflexivity": "<author's acknowledgment of own role>",
    "context": {{
      "geographic": "<geographic context>",
      "temporal": "<temporal/historical context>",
      "institutional": "<institutional context>"
    }}
  }}
}}"""


def build_assessment_prompt(context: PromptContext) -> str:
    """Full-text assessment prompt adapted to document type and academic field."""
    type_info = get_document_type_description(context.document_type)
    guidance = get_field_guidance(context.field)
    weights = context.framework.weights
    total = f"{weights.total:.1f}"
    field_name = field_label(context.field)
    title = context.document_title or "Unknown"
    focus_areas = "\n  - ".join(context.framework.assessment_focus)
    biases = "\n  - ".join(context.framework.bias_priorities)
    schema = render_json_schema(context.framework, title, type_info.name)

    return f"""You are a research assessment expert analyzing the following academic {type_info.category}.

DOCUMENT INFORMATION:
- Title: {title}
- Document Type: {type_info.name} ({type_info.description})
- Academic Field: {field_name}

ASSESSMENT FRAMEWORK CONTEXT:
{guidance}

CREDIBILITY ASSESSMENT COMPONENTS (total possible: {total} points):
Assessment weight/priority for this {type_info.name} in {field_name}:
- Methodological Rigor: Maximum score {_num(weights.methodological_rigor)}
- Data Transparency: Maximum score {_num(weights.data_transparency)}
- Source Quality: Maximum score {_num(weights.source_quality)}
- Author Credibility: Maximum score {_num(weights.author_credibility)}
- Statistical Validity: Maximum score {_num(weights.statistical_validity)}
- Logical Consistency: Maximum score {_num(weights.logical_consistency)}

ASSESSMENT FOCUS AREAS:
- {focus_areas}

PRIMARY BIAS CONCERNS FOR THIS FIELD:
- {biases}

DOCUMENT TEXT:
{truncate_document(context.full_text)}

ANALYSIS TASK:
Provide a comprehensive assessment with the following JSON structure:

{schema}

CRITICAL INSTRUCTIONS:
1. All scores must use the weighted scale provided (not 0-10)
2. IMPORTANT: totalScore must never exceed {total} - this is the maximum possible assessment weight
3. Each component must stay within its specified maximum (e.g., methodologicalRigor max: {_num(weights.methodological_rigor)})
4. Rate with accuracy - do not inflate scores
5. Focus on what IS in the document, not what should be there
6. For {type_info.name}, prioritize assessment of: {type_info.priorities}
7. Consider field-specific expectations for {AcademicField(context.field).value}
8. If information is unavailable, indicate this in evidence
9. Be specific: cite examples, direct quotes, or clear evidence
10. Return ONLY valid JSON, no additional text before or after
"""


def build_abstract_only_prompt(title: Optional[str], abstract: str,
                               document_type: DocumentType, field: AcademicField) -> str:
    """Conservative prompt used when only an abstract (or a short text) is available."""
    framework = get_framework_guidelines(document_type, field)
    type_info = get_document_type_description(document_type)
    shown_title = title or "Unknown"
    schema = render_json_schema(framework, shown_title, type_info.name)

    return f"""Analyze the following academic abstract and provide assessment based on the information available.

DOCUMENT INFORMATION:
- Title: {shown_title}
- Document Type: {DocumentType(document_type).value}
- Academic Field: {field_label(field)}

NOTE: Full document text is unavailable. Assessment is based on abstract only. Be conservative in scores and indicate where full text would be needed for proper assessment.

ABSTRACT:
{abstract}

Provide your assessment in the following JSON format (totalScore must never exceed {framework.weights.total:.1f}), and indicate in evidence fields where full document review would strengthen or change the assessment:

{schema}

Return ONLY valid JSON, no additional text before or after."""


def select_prompt(title: Optional[str], text: str, abstract: Optional[str],
                  document_type: DocumentType, field: AcademicField,
                  framework: FrameworkGuidelines) -> str:
    """Pick the full-text prompt for texts longer than FULL_TEXT_THRESHOLD, the abstract-only prompt otherwise."""
    text = text or ""
    if len(text) > FULL_TEXT_THRESHOLD:
        logger.info(f"Using full-text prompt ({len(text)} chars)")
        return build_assessment_prompt(PromptContext(
            document_title=title,
            document_type=document_type,
            field=field,
            framework=framework,
            full_text=text,
            abstract=abstract,
        ))
    logger.info(f"Text has {len(text)} chars (threshold {FULL_TEXT_THRESHOLD}); using abstract-only prompt")
    return build_abstract_only_prompt(title, abstract or text, document_type, field)
