"""OpenAlex API client for searching research papers."""

import json
import logging
from typing import Dict, List, Optional

import requests

from ..models import Paper

logger = logging.getLogger(__name__)


class OpenAlexClient:
    """Client for the OpenAlex works search API."""

    def __init__(self, mailto: Optional[str] = None, timeout: int = 30):
        self.mailto = mailto
        self.timeout = timeout
        self.base_url = "https://api.openalex.org/works"
        self.authors_url = "https://api.openalex.org/authors"

    @staticmethod
    def _rebuild_abstract(inverted_index: Optional[Dict[str, List[int]]]) -> Optional[str]:
        """Rebuild abstract text from OpenAlex's word -> positions index."""
        if not inverted_index:
            return None
        positions = []
        for word, indices in inverted_index.items():
            for index in indices:
                positions.append((index, word))
        positions.sort()
        return " ".join(word for _, word in positions)

    def _to_paper(self, work: Dict) -> Optional[Paper]:
        """Convert an OpenAlex work record into a Paper."""
        title = work.get('title') or work.get('display_name')
        work_id = work.get('id')
        if not title or not work_id:
            logger.debug(f"Skipping OpenAlex work without id/title: {work_id}")
            return None

        openalex_id = work_id.rsplit('/', 1)[-1]
        authors = [
            a.get('author', {}).get('display_name')
            for a in work.get('authorships', []) or []
            if a.get('author', {}).get('display_name')
        ]
        primary_location = work.get('primary_location') or {}
        source = primary_location.get('source') or {}
        best_oa = work.get('best_oa_location') or {}
        open_access = (work.get('open_access') or {}).get('is_oa')
        doi = work.get('doi')
        if doi and doi.startswith('https://doi.org/'):
            doi = doi[len('https://doi.org/'):]

        return Paper(
            id=openalex_id,
            title=title,
            authors=authors,
            journal=source.get('display_name'),
            doi=doi,
            abstract=self._rebuild_abstract(work.get('abstract_inverted_index')),
            publication_date=work.get('publication_date'),
            url=primary_location.get('landing_page_url') or work_id,
            year=work.get('publication_year'),
            citation_count=work.get('cited_by_count'),
            open_access=open_access,
            pdf_url=best_oa.get('pdf_url') or primary_location.get('pdf_url'),
            openalex_id=openalex_id,
        )

    def _get(self, url: str, params: Dict) -> Optional[Dict]:
        if self.mailto:
            params['mailto'] = self.mailto
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error(f"OpenAlex API request timed out: {url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"OpenAlex API request failed: {e}")
            if hasattr(e, 'response') and e.response is not None:
                logger.error(f"OpenAlex Response Status: {e.response.status_code}")
                logger.error(f"OpenAlex Response Body: {e.response.text}")
            return None

        try:
            return response.json()
        except json.JSONDecodeError:
            logger.error(f"Failed to decode JSON response from OpenAlex: {response.text[:500]}")
            return None

    def _resolve_author_id(self, author: str) -> Optional[str]:
        data = self._get(self.authors_url, {'search': author, 'per-page': 1})
        if not data or not data.get('results'):
            logger.warning(f"No OpenAlex author found matching '{author}'")
            return None
        return data['results'][0]['id'].rsplit('/', 1)[-1]

    def search_papers(self, query: str, author: Optional[str] = None, limit: int = 10) -> List[Paper]:
        """Search OpenAlex works by free text and an optional author name.

        Args:
            query: Free-text search over titles, abstracts and full text
            author: Author name; restricts results to that author's works
            limit: Maximum number of papers to return

        Returns:
            List of Paper records, in OpenAlex relevance order
        """
        if not (query and query.strip()) and not author:
            logger.warning("Search requires a query or an author filter.")
            return []

        params = {'per-page': min(max(limit, 1), 200)}
        if query and query.strip():
            params['search'] = query.strip()
        if author:
            author_id = self._resolve_author_id(author)
            if not author_id:
                return []
            params['filter'] = f"author.id:{author_id}"

        logger.info(f"Searching OpenAlex with params: {params}")
        data = self._get(self.base_url, params)
        if not data or 'results' not in data:
            logger.warning("Unexpected OpenAlex response format")
            return []

        papers = []
        for work in data['results']:
            paper = self._to_paper(work)
            if paper:
                papers.append(paper)

        total = data.get('meta', {}).get('count', len(papers))
        logger.info(f"Retrieved {len(papers)} papers (total available: {total})")
        return papers[:limit]
