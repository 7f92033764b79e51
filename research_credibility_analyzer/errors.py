"""Error types surfaced by the analysis pipeline."""

from typing import Any, Dict, Optional


class AnalysisError(Exception):
    """Base class for terminal analysis failures."""
    kind = "analysis_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Structured error result, distinguishable by kind."""
        return {"error": self.kind, "message": self.message}


class ProviderError(AnalysisError):
    """The LLM provider answered with a non-2xx status or could not be reached.

    ``status_code`` is 0 for transport failures. ``body`` is the provider's
    error body, kept verbatim.
    """
    kind = "provider_error"

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        super().__init__(message or f"LLM provider returned status {status_code}")
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["details"] = self.body
        return result


class ParseError(AnalysisError):
    """No JSON object could be extracted from the provider reply."""
    kind = "parse_error"


class SchemaError(AnalysisError):
    """The provider reply is JSON but lacks a required field."""
    kind = "schema_error"


class DuplicateBookmarkError(Exception):
    """The paper is already bookmarked."""
