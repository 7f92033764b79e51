"""Data models for research credibility analysis."""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """Genre of a submitted work."""
    ARTICLE = "article"
    REVIEW = "review"
    BOOK = "book"
    DISSERTATION = "dissertation"
    PROPOSAL = "proposal"
    CASE_STUDY = "case-study"
    ESSAY = "essay"
    THEORETICAL = "theoretical"
    PREPRINT = "preprint"
    CONFERENCE = "conference"
    UNKNOWN = "unknown"


class AcademicField(str, Enum):
    """Disciplinary domain of a submitted work."""
    NATURAL_SCIENCES = "natural-sciences"
    ENGINEERING = "engineering"
    MEDICAL = "medical"
    AGRICULTURAL = "agricultural"
    SOCIAL_SCIENCES = "social-sciences"
    HUMANITIES = "humanities"
    FORMAL_SCIENCES = "formal-sciences"
    INTERDISCIPLINARY = "interdisciplinary"


class CredibilityRating(str, Enum):
    EXEMPLARY = "Exemplary"
    STRONG = "Strong"
    MODERATE = "Moderate"
    WEAK = "Weak"
    VERY_POOR = "Very Poor"
    INVALID = "Invalid"


class WireModel(BaseModel):
    """Base for models exchanged with the LLM: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True)


class FrameworkWeights(WireModel):
    """Maximum score per credibility axis."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    methodological_rigor: float = Field(..., alias="methodologicalRigor")
    data_transparency: float = Field(..., alias="dataTransparency")
    source_quality: float = Field(..., alias="sourceQuality")
    author_credibility: float = Field(..., alias="authorCredibility")
    statistical_validity: float = Field(..., alias="statisticalValidity")
    logical_consistency: float = Field(..., alias="logicalConsistency")

    @property
    def total(self) -> float:
        return (self.methodological_rigor + self.data_transparency + self.source_quality
                + self.author_credibility + self.statistical_validity + self.logical_consistency)


class FrameworkGuidelines(WireModel):
    """Scoring weights and qualitative guidance for a (document type, field) pair."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    document_type: DocumentType = Field(..., alias="documentType")
    field: AcademicField
    weights: FrameworkWeights
    assessment_focus: Tuple[str, ...] = Field(..., alias="assessmentFocus")
    bias_priorities: Tuple[str, ...] = Field(..., alias="biasPriorities")


class CredibilityComponent(WireModel):
    name: str = ""
    score: float = Field(..., description="Points awarded, between 0 and max_score")
    max_score: float = Field(..., alias="maxScore")
    description: str = ""
    evidence: List[str] = Field(default_factory=list)


class CredibilityScore(WireModel):
    """Six weighted components, their total and the qualitative rating band."""
    methodological_rigor: Optional[CredibilityComponent] = Field(None, alias="methodologicalRigor")
    data_transparency: Optional[CredibilityComponent] = Field(None, alias="dataTransparency")
    source_quality: Optional[CredibilityComponent] = Field(None, alias="sourceQuality")
    author_credibility: Optional[CredibilityComponent] = Field(None, alias="authorCredibility")
    statistical_validity: Optional[CredibilityComponent] = Field(None, alias="statisticalValidity")
    logical_consistency: Optional[CredibilityComponent] = Field(None, alias="logicalConsistency")
    total_score: float = Field(..., alias="totalScore")
    rating: Optional[CredibilityRating] = None
    max_total_score: Optional[float] = Field(None, alias="maxTotalScore")


class BiasDetection(WireModel):
    type: str = ""
    evidence: str = ""
    severity: str = ""


class BiasAnalysis(WireModel):
    biases: List[BiasDetection] = Field(default_factory=list)
    overall_level: str = Field("", alias="overallLevel")
    justification: str = ""


class ResearchFundamentals(WireModel):
    title: str = ""
    authors: List[str] = Field(default_factory=list)
    journal: str = ""
    doi: Optional[str] = None
    publication_date: str = Field("", alias="publicationDate")
    article_type: str = Field("", alias="articleType")


class Methodology(WireModel):
    study_design: str = Field("", alias="studyDesign")
    sample_size: str = Field("", alias="sampleSize")
    population: str = ""
    sampling_method: str = Field("", alias="samplingMethod")
    setting: str = ""
    intervention: Optional[str] = None
    comparison_groups: Optional[str] = Field(None, alias="comparisonGroups")
    outcomes_measures: List[str] = Field(default_factory=list, alias="outcomesMeasures")
    statistical_methods: List[str] = Field(default_factory=list, alias="statisticalMethods")
    study_duration: str = Field("", alias="studyDuration")


class Findings(WireModel):
    primary_findings: List[str] = Field(default_factory=list, alias="primaryFindings")
    secondary_findings: List[str] = Field(default_factory=list, alias="secondaryFindings")
    effect_sizes: List[str] = Field(default_factory=list, alias="effectSizes")
    clinical_significance: str = Field("", alias="clinicalSignificance")
    unexpected_findings: List[str] = Field(default_factory=list, alias="unexpectedFindings")


class Limitations(WireModel):
    author_acknowledged: List[str] = Field(default_factory=list, alias="authorAcknowledged")
    methodological_identified: List[str] = Field(default_factory=list, alias="methodologicalIdentified")
    severity: str = ""


class Conclusions(WireModel):
    primary_conclusion: str = Field("", alias="primaryConclusion")
    supported_by_data: Optional[bool] = Field(None, alias="supportedByData")
    practical_implications: List[str] = Field(default_factory=list, alias="practicalImplications")
    future_research_needed: List[str] = Field(default_factory=list, alias="futureResearchNeeded")
    recommendations: List[str] = Field(default_factory=list)
    generalizability: str = ""


class KeyFindings(WireModel):
    fundamentals: ResearchFundamentals = Field(default_factory=ResearchFundamentals)
    research_question: str = Field("", alias="researchQuestion")
    hypothesis: Optional[str] = None
    methodology: Methodology = Field(default_factory=Methodology)
    findings: Findings = Field(default_factory=Findings)
    limitations: Limitations = Field(default_factory=Limitations)
    conclusions: Conclusions = Field(default_factory=Conclusions)


class Assumptions(WireModel):
    stated: List[str] = Field(default_factory=list)
    unstated: List[str] = Field(default_factory=list)


class ResearchContext(WireModel):
    geographic: str = ""
    temporal: str = ""
    institutional: str = ""


class ResearchPerspective(WireModel):
    theoretical_framework: str = Field("", alias="theoreticalFramework")
    paradigm: str = ""
    disciplinary_perspective: str = Field("", alias="disciplinaryPerspective")
    epistemological_stance: str = Field("", alias="epistemologicalStance")
    assumptions: Assumptions = Field(default_factory=Assumptions)
    ideological_position: Optional[str] = Field(None, alias="ideologicalPosition")
    author_reflexivity: Optional[str] = Field(None, alias="authorReflexivity")
    context: ResearchContext = Field(default_factory=ResearchContext)


class Paper(WireModel):
    """A research document, either from a search index or an upload."""
    id: str
    title: str
    authors: List[str] = Field(default_factory=list)
    journal: Optional[str] = None
    doi: Optional[str] = None
    abstract: Optional[str] = None
    publication_date: Optional[str] = Field(None, alias="publicationDate")
    url: Optional[str] = None
    year: Optional[int] = None
    document_type: Optional[DocumentType] = Field(None, alias="documentType")
    field: Optional[AcademicField] = None
    citation_count: Optional[int] = Field(None, alias="citationCount")
    open_access: Optional[bool] = Field(None, alias="openAccessStatus")
    pdf_url: Optional[str] = Field(None, alias="pdfUrl")
    openalex_id: Optional[str] = Field(None, alias="openAlexId")


class AnalysisResult(WireModel):
    """Complete outcome of one analysis request. Never mutated after creation."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    paper: Paper
    credibility: CredibilityScore
    bias: BiasAnalysis = Field(default_factory=BiasAnalysis)
    key_findings: KeyFindings = Field(default_factory=KeyFindings, alias="keyFindings")
    perspective: ResearchPerspective = Field(default_factory=ResearchPerspective)
    timestamp: str


class BookmarkedPaper(WireModel):
    """A saved analysis with optional user notes."""
    id: str
    analysis: AnalysisResult
    bookmarked_at: str = Field(..., alias="bookmarkedAt")
    notes: Optional[str] = None
