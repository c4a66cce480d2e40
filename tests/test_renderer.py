"""Tests for report rendering."""

from __future__ import annotations

import json

from news_aggregator.core.types import (
    AggregationResult,
    AggregationStats,
    Article,
    ProviderResult,
    ScoredArticle,
)
from news_aggregator.output.renderer import render_json, render_markdown


def _result() -> AggregationResult:
    guardian = Article(
        title="Carbon border tax explained",
        url="https://gu.com/cbam",
        provider_id="guardian",
        source_name="The Guardian",
        description="What CBAM means for exporters.",
    )
    nyt = Article(
        title="Refiners cut emissions",
        url="",
        provider_id="nyt",
        source_name="The New York Times",
    )
    return AggregationResult(
        topic="carbon tax",
        articles=[
            ScoredArticle(article=guardian, relevance_score=0.24, composite_score=0.51),
            ScoredArticle(article=nyt, relevance_score=0.12, composite_score=0.42),
        ],
        provider_results=[
            ProviderResult(provider_id="guardian", articles=[guardian], raw_count=3),
            ProviderResult(provider_id="nyt", articles=[nyt], raw_count=2),
        ],
        stats=AggregationStats(
            total_providers_configured=5,
            unique_sources_used=2,
            diversity_score=0.4,
            quality_score=0.55,
        ),
        target_count=18,
    )


def test_render_markdown_groups_by_source(tmp_path):
    output_path = tmp_path / "reports" / "carbon.md"

    render_markdown(_result(), output_path)

    content = output_path.read_text(encoding="utf-8")
    assert content.startswith("# News for: carbon tax")
    assert "## The Guardian" in content
    assert "## The New York Times" in content
    assert "### Carbon border tax explained" in content
    assert "- Link: https://gu.com/cbam" in content
    assert "- Score: 0.510" in content
    assert "Total: 2 of 5 raw articles" in content
    assert content.count("- Link:") == 1


def test_render_markdown_custom_title(tmp_path):
    output_path = tmp_path / "out.md"

    render_markdown(_result(), output_path, title="Weekly brief")

    assert output_path.read_text(encoding="utf-8").startswith("# Weekly brief")


def test_render_json(tmp_path):
    output_path = tmp_path / "out.json"

    render_json(_result(), output_path)

    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["topic"] == "carbon tax"
    assert [a["title"] for a in data["articles"]] == [
        "Carbon border tax explained",
        "Refiners cut emissions",
    ]
    assert data["source_breakdown"]["guardian"]["count"] == 3
    assert data["statistics"]["diversity_score"] == 0.4
    assert data["enterprise_grade"] is False
