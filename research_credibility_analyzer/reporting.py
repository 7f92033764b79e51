"""Insights report generation over bookmarked analyses."""

import csv
import json
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional

from .models import BookmarkedPaper, CredibilityRating

logger = logging.getLogger(__name__)

NORMALIZED_SCALE = 10.0


def normalized_score(total_score: float, max_total_score: Optional[float]) -> float:
    """Express a score on the 10 point scale regardless of the framework's weight sum."""
    if not max_total_score:
        return total_score
    return total_score / max_total_score * NORMALIZED_SCALE


class InsightsReportGenerator:
    """Generates aggregate statistics for bookmarked analyses."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def build_summary(self, bookmarks: List[BookmarkedPaper]) -> Dict:
        """Compute aggregate statistics without touching the filesystem."""
        total = len(bookmarks)
        by_field: Dict[str, int] = {}
        by_doc_type: Dict[str, int] = {}
        distribution = {rating.value: 0 for rating in CredibilityRating}

        credibility_sum = 0.0
        high_bias = 0
        for bookmark in bookmarks:
            analysis = bookmark.analysis
            credibility = analysis.credibility
            credibility_sum += normalized_score(credibility.total_score, credibility.max_total_score)
            if analysis.bias.overall_level == 'High':
                high_bias += 1
            if credibility.rating is not None:
                distribution[credibility.rating.value] += 1

            field = analysis.paper.field.value if analysis.paper.field else 'Unknown'
            doc_type = analysis.paper.document_type.value if analysis.paper.document_type else 'Unknown'
            by_field[field] = by_field.get(field, 0) + 1
            by_doc_type[doc_type] = by_doc_type.get(doc_type, 0) + 1

        return {
            "total_papers": total,
            "average_credibility": round(credibility_sum / total, 2) if total else 0.0,
            "high_bias_percentage": round(high_bias / total * 100, 1) if total else 0.0,
            "fields_covered": len(by_field),
            "by_field": dict(sorted(by_field.items(), key=lambda kv: (-kv[1], kv[0]))),
            "by_document_type": dict(sorted(by_doc_type.items(), key=lambda kv: (-kv[1], kv[0]))),
            "credibility_distribution": distribution,
        }

    def generate_report(self, bookmarks: List[BookmarkedPaper]) -> Optional[Dict]:
        """Write the JSON insights report and return it."""
        report = {
            "metadata": {
                "report_generated": time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime()),
                "normalized_scale": NORMALIZED_SCALE,
            },
            "summary": self.build_summary(bookmarks),
            "papers": [
                {
                    "bookmark_id": b.id,
                    "paper_id": b.analysis.paper.id,
                    "title": b.analysis.paper.title,
                    "document_type": b.analysis.paper.document_type.value if b.analysis.paper.document_type else None,
                    "field": b.analysis.paper.field.value if b.analysis.paper.field else None,
                    "total_score": b.analysis.credibility.total_score,
                    "max_total_score": b.analysis.credibility.max_total_score,
                    "rating": b.analysis.credibility.rating.value if b.analysis.credibility.rating else None,
                    "bias_level": b.analysis.bias.overall_level,
                    "bookmarked_at": b.bookmarked_at,
                    "notes": b.notes,
                }
                for b in bookmarks
            ],
        }

        self.output_dir.mkdir(parents=True, exist_ok=True)
        report_path = self.output_dir / "insights_report.json"
        try:
            with open(report_path, 'w', encoding='utf-8') as f:
                json.dump(report, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Failed to save report file {report_path}: {e}")
            return None

        summary = report["summary"]
        logger.info(f"Report generated: {report_path}")
        logger.info("--- Insights Summary ---")
        logger.info(f"  Total papers: {summary['total_papers']}")
        logger.info(f"  Average credibility: {summary['average_credibility']}/{NORMALIZED_SCALE:g}")
        logger.info(f"  High bias: {summary['high_bias_percentage']}%")
        logger.info(f"  Fields covered: {summary['fields_covered']}")
        logger.info("--- End Summary ---")
        return report

    def generate_csv_report(self, bookmarks: List[BookmarkedPaper]) -> Optional[Path]:
        """Write one CSV row per bookmarked analysis."""
        fieldnames = [
            "bookmark_id", "paper_id", "title", "authors", "year", "doi",
            "document_type", "field", "total_score", "max_total_score",
            "normalized_score", "rating", "bias_level", "bookmarked_at", "notes",
        ]
        rows = []
        for b in bookmarks:
            paper = b.analysis.paper
            credibility = b.analysis.credibility
            rows.append({
                "bookmark_id": b.id,
                "paper_id": paper.id,
                "title": paper.title,
                "authors": "|".join(paper.authors),
                "year": paper.year if paper.year is not None else "",
                "doi": paper.doi or "",
                "document_type": paper.document_type.value if paper.document_type else "",
                "field": paper.field.value if paper.field else "",
                "total_score": credibility.total_score,
                "max_total_score": credibility.max_total_score if credibility.max_total_score is not None else "",
                "normalized_score": round(normalized_score(credibility.total_score, credibility.max_total_score), 2),
                "rating": credibility.rating.value if credibility.rating else "",
                "bias_level": b.analysis.bias.overall_level,
                "bookmarked_at": b.bookmarked_at,
                "notes": b.notes or "",
            })
        rows.sort(key=lambda r: r["bookmarked_at"], reverse=True)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        csv_path = self.output_dir / "insights_report.csv"
        try:
            with open(csv_path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=fieldnames, quoting=csv.QUOTE_NONNUMERIC)
                writer.writeheader()
                writer.writerows(rows)
        except OSError as e:
            logger.error(f"Failed to save CSV report file {csv_path}: {e}")
            return None

        logger.info(f"CSV report generated: {csv_path}")
        return csv_path
