"""Feedback CLI commands: votes and comments against the feedback API."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components
from errors import ValidationError
from feedback import FeedbackSnapshot

console = Console()


def _show_snapshot(snapshot: FeedbackSnapshot) -> None:
    vote = f" | you: {snapshot.user_vote}" if snapshot.user_vote else ""
    console.print(
        f"[cyan]{snapshot.resource_id}[/] "
        f"[green]+{snapshot.likes}[/] [red]-{snapshot.dislikes}[/] "
        f"[dim]{snapshot.comment_count} comments{vote}[/]"
    )


@click.command()
@click.argument("resource_id", required=False)
def feedback(resource_id: Optional[str]):
    """Show feedback counts for one resource, or all of them."""
    c = get_components(with_client=True)
    with c["client"] as client:
        if resource_id:
            _show_snapshot(client.fetch_one(resource_id))
            return

        snapshots = client.fetch_all()
        if not snapshots:
            console.print("[yellow]No feedback yet.[/]")
            return

        table = Table(show_header=True)
        table.add_column("Resource", style="cyan")
        table.add_column("Likes", justify="right", style="green")
        table.add_column("Dislikes", justify="right", style="red")
        table.add_column("Comments", justify="right")
        for rid, s in sorted(snapshots.items()):
            table.add_row(rid, str(s.likes), str(s.dislikes), str(s.comment_count))
        console.print(table)


@click.command()
@click.argument("resource_id")
@click.argument("choice", type=click.Choice(["like", "dislike", "none"]))
def vote(resource_id: str, choice: str):
    """Toggle a like/dislike. Repeating your current vote retracts it; 'none' always retracts."""
    c = get_components(with_client=True)
    with c["client"] as client:
        snapshot = client.vote(resource_id, None if choice == "none" else choice)
    if snapshot is None:
        raise SystemExit(1)
    _show_snapshot(snapshot)


@click.command()
@click.argument("resource_id")
@click.argument("text", required=False)
def comment(resource_id: str, text: Optional[str]):
    """Leave an anonymous comment. Opens editor if no text provided."""
    if not text:
        text = click.edit("\n")
        if not text:
            console.print("[yellow]No comment provided, cancelled.[/]")
            return

    c = get_components(with_client=True)
    with c["client"] as client:
        try:
            posted = client.comment(resource_id, text)
        except ValidationError as e:
            console.print(f"[red]Error:[/] {e}")
            raise SystemExit(1)
    if posted is None:
        raise SystemExit(1)
    console.print("[green]Thank you for your feedback![/]")


@click.command()
@click.argument("resource_id")
def comments(resource_id: str):
    """List comments for a resource, newest first."""
    c = get_components(with_client=True)
    with c["client"] as client:
        items = client.list_comments(resource_id)

    if not items:
        console.print("[yellow]No comments yet.[/]")
        return

    for item in items:
        console.print(f"\n[dim]{item.timestamp[:10]}[/]")
        console.print(item.text)
