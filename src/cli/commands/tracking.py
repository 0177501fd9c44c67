"""Interaction tracking, interests, recommendations and search commands."""

from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from errors import ValidationError
from personalization import InteractionSignal
from shared_types import SEARCH_CATEGORY, InteractionKind

console = Console()
logger = structlog.get_logger()

HELPLINE_CATEGORY = "crisis"


def _detail_for(kind: str, href: str, label: str, section: Optional[str], query: Optional[str]) -> dict:
    """Extra fields each interaction kind carries."""
    if kind == InteractionKind.EXTERNAL_LINK:
        return {"url": href, "title": label}
    if kind == InteractionKind.ACCORDION:
        return {"section": section or label}
    if kind == InteractionKind.SEARCH:
        return {"query": query or "", "title": label}
    if kind == InteractionKind.HELPLINE:
        return {"title": label}
    return {}


@click.command()
@click.option(
    "-k",
    "--kind",
    type=click.Choice([k.value for k in InteractionKind]),
    default=InteractionKind.NAVIGATION.value,
    help="Interaction kind",
)
@click.option("--hint", help="Section id the element sits in")
@click.option("--href", default="", help="Link target")
@click.option("--label", default="", help="Visible text of the element")
@click.option("--section", help="Accordion section name")
@click.option("--query", help="Search query that led to the click")
def track(kind: str, hint: Optional[str], href: str, label: str, section: Optional[str], query: Optional[str]):
    """Record an interaction and show the inferred category."""
    c = get_components()

    if kind == InteractionKind.HELPLINE:
        category = HELPLINE_CATEGORY
    elif kind == InteractionKind.SEARCH:
        category = SEARCH_CATEGORY
    else:
        category = c["classifier"].classify(InteractionSignal(hint=hint, href=href, label=label))

    try:
        c["tracker"].record(category, kind, _detail_for(kind, href, label, section, query))
    except ValidationError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    console.print(f"[green]Tracked[/] {kind} -> [cyan]{category}[/]")


@click.command()
@click.option("-n", "--limit", default=3, help="How many interests to show")
def interests(limit: int):
    """Show current top interests."""
    c = get_components()
    profile = c["tracker"].profile()

    if profile.is_empty():
        console.print("[yellow]No interactions recorded yet.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Category", style="cyan")
    table.add_column("Weight", justify="right")
    for category, weight in profile.top_interests(limit):
        table.add_row(c["catalog"].display_name(category, default=category), f"{weight:.1f}")

    console.print(table)
    console.print(f"[dim]Visits: {profile.total_visits} | Recent: {len(profile.last_clicks)}[/]")


@click.command()
@click.option("-n", "--limit", default=None, type=int, help="Max recommendations")
def recommend(limit: Optional[int]):
    """Recommended resources for the current interest profile."""
    c = get_components(new_visit=True)
    limit = limit or c["config_model"].tracking.max_recommendations
    recs = c["ranker"].recommendations(c["tracker"].profile(), max_results=limit)

    table = Table(show_header=True)
    table.add_column("Resource", style="cyan")
    table.add_column("Category")
    table.add_column("Relevance", style="dim")
    table.add_column("URL", style="blue")
    for rec in recs:
        table.add_row(rec.title, c["catalog"].display_name(rec.category), rec.relevance.value, rec.url)

    console.print(table)


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def clear(yes: bool):
    """Erase all tracked interactions."""
    if not yes and not click.confirm("Clear all tracking data?"):
        return
    c = get_components()
    c["tracker"].clear()
    console.print("[green]Tracking data cleared.[/]")


@click.command()
@click.argument("query")
@click.option("--select", "selected", help="Record a click on the result with this id")
def search(query: str, selected: Optional[str]):
    """Search the resource directory."""
    c = get_components(new_visit=True)
    results = c["search"].search(query)

    if selected:
        entry = c["search"].get(selected)
        if entry is None:
            console.print(f"[red]Not found:[/] {selected}")
            raise SystemExit(1)
        c["tracker"].record(SEARCH_CATEGORY, InteractionKind.SEARCH, {"query": query, "title": entry.title})
        console.print(f"[green]Opened[/] {entry.title} [blue]{entry.url}[/]")
        return

    if not results:
        console.print("[yellow]No resources found.[/]")
        return

    for entry in results:
        console.print(f"\n[cyan]{entry.title}[/] [dim]({entry.id} | {entry.category})[/]")
        console.print(entry.description)
        console.print(f"[blue]{entry.url}[/]")
