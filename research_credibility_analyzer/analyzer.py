"""Main analyzer class that orchestrates the analysis pipeline."""

import hashlib
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from .analysis.classifier import classify
from .analysis.framework import get_framework_guidelines
from .analysis.validator import parse_analysis_payload
from .bookmarks import BookmarkStore, JSONBookmarkStore
from .clients.anthropic import AnthropicClient
from .clients.openai import OpenAIClient
from .clients.openalex import OpenAlexClient
from .models import AnalysisResult, BookmarkedPaper, Paper
from .processing.downloader import PaperDownloader
from .processing.text_extractor import TextExtractor
from .reporting import InsightsReportGenerator
from .utils.cache import save_cache
from .utils.prompts import FULL_TEXT_THRESHOLD, SYSTEM_PROMPT, select_prompt

logger = logging.getLogger(__name__)

PROVIDERS = ('anthropic', 'openai')
DEFAULT_MODELS = {
    'anthropic': 'claude-3-5-haiku-20241022',
    'openai': 'gpt-4o-mini-2024-07-18',
}


class LLMClient(Protocol):
    def complete(self, system_prompt: str, user_prompt: str) -> str: ...


def generate_file_id(filename: str) -> str:
    """Stable id for an uploaded file, derived from its name."""
    digest = hashlib.sha1(filename.encode('utf-8')).hexdigest()
    return f"file-{digest[:12]}"


class ResearchAnalyzer:
    """Classifies a document, builds the adapted prompt, queries the LLM and validates the reply."""

    def __init__(self,
                 provider: str = 'anthropic',
                 model: Optional[str] = None,
                 anthropic_key: Optional[str] = None,
                 openai_key: Optional[str] = None,
                 openalex_mailto: Optional[str] = None,
                 max_tokens: int = 4000,
                 always_recompute_rating: bool = False,
                 output_dir: Path = Path("./results"),
                 bookmarks_file: Optional[Path] = None,
                 llm_client: Optional[LLMClient] = None,
                 bookmark_store: Optional[BookmarkStore] = None,
                 text_extractor: Optional[TextExtractor] = None,
                 search_client: Optional[OpenAlexClient] = None,
                 downloader: Optional[PaperDownloader] = None):
        """Initialize the analyzer.

        API keys fall back to ANTHROPIC_API_KEY (or CLAUDE_API_KEY) and
        OPENAI_API_KEY and are only checked when the first analysis runs.
        An explicit ``llm_client`` bypasses key handling.
        """
        self.provider = provider.lower()
        if self.provider not in PROVIDERS:
            raise ValueError(f"Provider must be one of {PROVIDERS}, got '{provider}'")
        self.model = model or DEFAULT_MODELS[self.provider]
        self.max_tokens = max_tokens
        self.always_recompute_rating = always_recompute_rating
        self.output_dir = Path(output_dir)

        self._llm_client = llm_client
        self._anthropic_key = anthropic_key
        self._openai_key = openai_key

        self.text_extractor = text_extractor or TextExtractor()
        self.search_client = search_client or OpenAlexClient(openalex_mailto or os.getenv('OPENALEX_MAILTO'))
        self.downloader = downloader or PaperDownloader()
        self.bookmark_store = bookmark_store or JSONBookmarkStore(
            bookmarks_file or self.output_dir / "bookmarks.json")
        self.report_generator = InsightsReportGenerator(self.output_dir)

        logger.info(f"Initialized ResearchAnalyzer with {self.provider} provider using model {self.model}")

    @property
    def llm_client(self) -> LLMClient:
        """Provider client, created on first use so search and insights run without API keys."""
        if self._llm_client is None:
            self._llm_client = self._create_llm_client()
        return self._llm_client

    def _create_llm_client(self) -> LLMClient:
        if self.provider == 'anthropic':
            api_key = self._anthropic_key or os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')
            if not api_key:
                raise ValueError("ANTHROPIC_API_KEY must be provided (as argument or environment variable)")
            return AnthropicClient(api_key, self.model, max_tokens=self.max_tokens)
        api_key = self._openai_key or os.getenv('OPENAI_API_KEY')
        if not api_key:
            raise ValueError("OPENAI_API_KEY must be provided (as argument or environment variable)")
        return OpenAIClient(api_key, self.model, max_tokens=self.max_tokens)

    def analyze_document(self, text: str, title: str, paper: Optional[Paper] = None) -> AnalysisResult:
        """Run the full pipeline on extracted text.

        Args:
            text: Extracted document text; may be empty
            title: Document title, used for classification and the prompt
            paper: Metadata to attach to the result; a minimal record is built when omitted

        Raises:
            ProviderError, ParseError, SchemaError: terminal, never retried
        """
        text = text or ""
        document_type, field = classify(text, title)
        framework = get_framework_guidelines(document_type, field)

        if paper is None:
            paper = Paper(id=generate_file_id(title), title=title, abstract=text[:FULL_TEXT_THRESHOLD] or None)
        abstract = paper.abstract or text or title

        prompt = select_prompt(title, text, abstract, document_type, field, framework)
        raw_reply = self.llm_client.complete(SYSTEM_PROMPT, prompt)
        payload = parse_analysis_payload(raw_reply, framework, self.always_recompute_rating)

        result = AnalysisResult(
            paper=paper.model_copy(update={'document_type': document_type, 'field': field}),
            credibility=payload.credibility,
            bias=payload.bias,
            key_findings=payload.key_findings,
            perspective=payload.perspective,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(f"Analysis complete for '{title}': {result.credibility.total_score:g}/"
                    f"{framework.weights.total:g} ({result.credibility.rating.value})")
        return result

    def analyze_upload(self, data: bytes, filename: str, mime_type: Optional[str] = None) -> AnalysisResult:
        """Analyze an uploaded file. Missing text is not an error: the filename stands in."""
        mime_type = mime_type or self.text_extractor.guess_mime_type(filename)
        logger.info(f"Processing uploaded file: {filename} ({len(data)} bytes, {mime_type})")

        text = self.text_extractor.extract_text(data, mime_type)
        title = Path(filename).stem or filename
        if not text:
            logger.info(f"No text extracted from {filename}; using the filename as document text.")

        paper = Paper(
            id=generate_file_id(filename),
            title=title,
            authors=['Uploaded Document'],
            abstract=(text or title)[:FULL_TEXT_THRESHOLD],
            year=datetime.now().year,
        )
        return self.analyze_document(text, title, paper)

    def analyze_file(self, path: Path) -> AnalysisResult:
        """Analyze a local file."""
        path = Path(path)
        with open(path, 'rb') as f:
            data = f.read()
        return self.analyze_upload(data, path.name)

    def analyze_paper(self, paper: Paper, fetch_full_text: bool = True) -> AnalysisResult:
        """Analyze a search result, using the open-access PDF when one can be fetched."""
        text = ""
        if fetch_full_text and paper.pdf_url:
            pdf_bytes = self.downloader.download_pdf(paper.pdf_url, label=paper.id)
            if pdf_bytes:
                text = self.text_extractor.extract_text(pdf_bytes, 'application/pdf')
        if not text:
            logger.info(f"No full text for {paper.id}; assessing from the abstract.")
            text = paper.abstract or ""
        return self.analyze_document(text, paper.title, paper)

    def search(self, query: str, author: Optional[str] = None, limit: int = 10) -> List[Paper]:
        return self.search_client.search_papers(query, author=author, limit=limit)

    def save_result(self, result: AnalysisResult) -> Optional[Path]:
        """Persist a result as JSON under the output directory."""
        path = self.output_dir / f"{result.paper.id}_analysis.json"
        if save_cache(path, result.model_dump(mode='json', by_alias=True)):
            logger.info(f"Saved analysis to {path}")
            return path
        return None

    def bookmark(self, result: AnalysisResult, notes: Optional[str] = None) -> BookmarkedPaper:
        return self.bookmark_store.add(result, notes)

    def generate_insights(self) -> Optional[Dict]:
        """Write JSON and CSV insights reports over all bookmarks."""
        bookmarks = self.bookmark_store.list()
        report = self.report_generator.generate_report(bookmarks)
        self.report_generator.generate_csv_report(bookmarks)
        return report
