"""
Command-line interface for the News Aggregator.

Uses Typer to provide a CLI with options for the main aggregation
settings. Supports loading .env files for provider API keys.
"""

from __future__ import annotations

import json
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
import typer

from .aggregator import Aggregator, run_aggregation
from .config import get_api_key, load_config
from .core.errors import AllProvidersFailedError, InvalidQueryError
from .core.types import AggregationResult
from .logging_utils import setup_logging
from .output.renderer import render_json, render_markdown

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def search(
    topic: str = typer.Argument(..., help="Free-text topic to search for."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    target: int | None = typer.Option(None, "--target", help="Desired number of articles."),
    max_count: int | None = typer.Option(None, "--max", help="Hard cap on returned articles."),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table, json or markdown."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report here."),
    provider: list[str] | None = typer.Option(
        None, "--provider", "-p", help="Restrict to these providers (repeatable)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Search all providers for a topic and print the ranked articles.

    Args:
        topic: Free-text topic query
        config: Optional path to YAML config file
        target: Override the target article count
        max_count: Override the maximum article count
        output_format: table, json or markdown
        output: Optional file for json/markdown output
        provider: Optional provider subset
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    logger = setup_logging(cfg.logging, output.parent if output else None)

    output_format = output_format.lower()
    if output_format not in ("table", "json", "markdown"):
        console.print(f"[red]Unsupported format:[/red] {output_format}")
        raise typer.Exit(code=2)

    try:
        aggregator = Aggregator(cfg, logger=logger, only=provider or None)
        result = run_aggregation(
            topic, target_count=target, max_count=max_count, aggregator=aggregator
        )
    except InvalidQueryError as exc:
        console.print(f"[red]Invalid query:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except ValueError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except AllProvidersFailedError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if output_format == "json":
        if output:
            render_json(result, output)
            console.print(f"Report generated: {output}")
        else:
            typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    if output_format == "markdown":
        path = output or Path(f"{_slug(result.topic)}.md")
        render_markdown(result, path)
        console.print(f"Report generated: {path}")
        return

    _render_table(result, console)


@app.command()
def providers(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
):
    """List configured providers with their weights, quotas and key status."""
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    enabled = set(cfg.aggregation.providers)

    table = Table(title="Providers")
    table.add_column("Provider")
    table.add_column("Enabled")
    table.add_column("Credibility", justify="right")
    table.add_column("Priority", justify="right")
    table.add_column("Daily quota", justify="right")
    table.add_column("API key")
    for name, settings in cfg.providers.items():
        table.add_row(
            name,
            "yes" if name in enabled and settings.enabled else "no",
            f"{settings.credibility:.2f}",
            f"{settings.priority_weight:.2f}",
            str(settings.daily_quota),
            "set" if get_api_key(settings) else f"missing ({settings.api_key_env})",
        )
    console.print(table)


def _render_table(result: AggregationResult, console: Console) -> None:
    stats = result.stats
    table = Table(title=f"Results for: {result.topic}")
    table.add_column("#", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("Published")
    for index, item in enumerate(result.articles, start=1):
        table.add_row(
            str(index),
            f"{item.composite_score:.3f}",
            item.article.title,
            item.article.source_name,
            item.article.published_at.strftime("%Y-%m-%d"),
        )
    console.print(table)

    for provider_result in result.provider_results:
        status = "ok" if provider_result.ok else f"[red]{provider_result.error}[/red]"
        console.print(f"  {provider_result.provider_id}: {provider_result.raw_count} raw, {status}")
    console.print(
        "[bold]Summary[/bold]: "
        f"raw={result.raw_count}, final={result.final_count}, "
        f"sources={stats.unique_sources_used}/{stats.total_providers_configured}, "
        f"diversity={stats.diversity_score:.2f}, quality={stats.quality_score:.2f}"
    )


def _slug(text: str) -> str:
    slug = "".join(ch if ch.isalnum() else "-" for ch in text.lower())
    return "-".join(part for part in slug.split("-") if part)[:50] or "report"


if __name__ == "__main__":
    app()
