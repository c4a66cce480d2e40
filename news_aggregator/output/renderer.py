"""
Report rendering for ranked aggregation results.

Markdown reports group articles by source and list scores for each one.
JSON output uses AggregationResult.to_dict().
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timezone
import json
from pathlib import Path

from ..core.types import AggregationResult


def render_markdown(result: AggregationResult, output_path: Path, title: str | None = None) -> None:
    """Render an aggregation result as a Markdown report.

    Groups articles by source name (largest group first) and keeps the
    ranked order within each group.

    Args:
        result: The aggregation result to render
        output_path: Path where the Markdown file will be written
        title: Report title; defaults to the topic
    """
    title = title or f"News for: {result.topic}"
    stats = result.stats
    grouped = defaultdict(list)
    for item in result.articles:
        grouped[item.article.source_name].append(item)

    lines = [
        f"# {title}",
        "",
        f"Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}",
        f"Total: {result.final_count} of {result.raw_count} raw articles",
        f"Providers: {stats.unique_sources_used}/{stats.total_providers_configured}"
        f" (diversity {stats.diversity_score:.2f})",
        f"Quality score: {stats.quality_score:.2f}",
        "",
    ]
    for source, items in sorted(grouped.items(), key=lambda item: (-len(item[1]), item[0].lower())):
        lines.append(f"## {source}")
        lines.append("")
        for item in items:
            art = item.article
            lines.append(f"### {art.title}")
            lines.append(f"- Published: {art.published_at.strftime('%Y-%m-%d %H:%M')}")
            if art.url:
                lines.append(f"- Link: {art.url}")
            lines.append(
                f"- Score: {item.composite_score:.3f}"
                f" (relevance {item.relevance_score:.2f},"
                f" domain {item.domain_score:.2f},"
                f" impact {item.impact_score:.2f})"
            )
            if art.description:
                lines.append(f"- Summary: {art.description}")
            lines.append("")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("\n".join(lines), encoding="utf-8")


def render_json(result: AggregationResult, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
