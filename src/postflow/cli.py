"""CLI commands for PostFlow using Typer."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from postflow.clients.content_feed import create_content_feed_client
from postflow.config import get_settings
from postflow.core.aggregation import CategoryPostAggregator, TagPostAggregator
from postflow.core.hierarchy import CategoryHierarchy
from postflow.core.sitemap import SitemapAssembler
from postflow.core.tag_cloud import bucketize
from postflow.errors import PostflowError
from postflow.output.sitemap_writer import create_sitemap_writer, render_sitemap_xml
from postflow.utils.logging import LogContext, get_logger, setup_logging


app = typer.Typer(
    name="postflow",
    help="Blog content aggregation and sitemap CLI",
    no_args_is_help=True,
)

console = Console()

SIZE_STYLES = {
    1: "dim",
    2: "white",
    3: "cyan",
    4: "bold cyan",
    5: "bold magenta",
}


@app.callback()
def main_callback():
    """Configure logging from settings."""
    settings = get_settings()
    setup_logging(level=settings.log_level.upper(), log_file=settings.log_file)


def _run(coro):
    """Run a coroutine, turning engine errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except PostflowError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


# --- Category Posts Command ---


@app.command("category-posts")
def category_posts(
    slug: str = typer.Argument(..., help="Category slug"),
    page: int = typer.Option(0, "--page", "-p", help="Page number (0-based)"),
    size: Optional[int] = typer.Option(None, "--size", "-s", help="Posts per page"),
):
    """List the posts of a category, including its child categories."""
    settings = get_settings()

    async def run():
        async with create_content_feed_client(settings) as feed:
            aggregator = CategoryPostAggregator(feed, settings)
            return await aggregator.get_category_listing(slug, page, size)

    listing = _run(run())
    posts = listing.posts

    console.print(f"\n[bold]{listing.category.name}[/bold]")
    if listing.parent:
        console.print(f"[dim]in {listing.parent.name}[/dim]")
    if listing.children:
        console.print("[dim]Subcategories: " + ", ".join(c.name for c in listing.children) + "[/dim]")
    console.print(f"[dim]{posts.total_elements} posts[/dim]")

    _print_posts(posts)


# --- Tag Posts Command ---


@app.command("tag-posts")
def tag_posts(
    slug: str = typer.Argument(..., help="Tag slug"),
    page: int = typer.Option(0, "--page", "-p", help="Page number (0-based)"),
    size: Optional[int] = typer.Option(None, "--size", "-s", help="Posts per page"),
):
    """List the posts carrying a tag."""
    settings = get_settings()

    async def run():
        async with create_content_feed_client(settings) as feed:
            return await TagPostAggregator(feed, settings).get_tag_posts(slug, page, size)

    posts = _run(run())

    console.print(f"\n[bold]#{slug}[/bold]")
    console.print(f"[dim]{posts.total_elements} posts[/dim]")
    _print_posts(posts)


def _print_posts(posts):
    if posts.empty:
        console.print("[yellow]No posts on this page[/yellow]")
        return

    table = Table(title=f"Page {posts.number + 1} of {max(posts.total_pages, 1)}")
    table.add_column("Published", style="dim")
    table.add_column("Title", style="green")
    table.add_column("Category")
    table.add_column("Slug", style="cyan")

    for post in posts.content:
        table.add_row(
            post.published_at.strftime("%Y-%m-%d"),
            post.title,
            post.category.name if post.category else "",
            post.slug,
        )

    console.print(table)


# --- Categories Command ---


@app.command()
def categories():
    """Show the category tree."""
    settings = get_settings()

    async def run():
        async with create_content_feed_client(settings) as feed:
            return CategoryHierarchy.from_categories(await feed.get_categories())

    hierarchy = _run(run())

    table = Table(title=f"{settings.site_name} categories")
    table.add_column("Name", style="green")
    table.add_column("Slug", style="cyan")
    table.add_column("Posts", justify="right")

    for node, level in hierarchy.flatten():
        prefix = "  " * level + ("└ " if level else "")
        table.add_row(f"{prefix}{node.name}", node.slug, str(node.post_count))

    console.print(table)


# --- Tags Command ---


@app.command()
def tags():
    """Show the tag cloud, most used tags first."""
    settings = get_settings()

    async def run():
        async with create_content_feed_client(settings) as feed:
            return await feed.get_tags()

    weighted = bucketize(_run(run()))

    if not weighted:
        console.print("[yellow]No tags found[/yellow]")
        return

    table = Table(title=f"{settings.site_name} tag cloud")
    table.add_column("Tag")
    table.add_column("Posts", justify="right")
    table.add_column("Size", justify="right")

    for item in weighted:
        style = SIZE_STYLES[item.size_class.value]
        table.add_row(
            f"[{style}]{item.tag.name}[/{style}]",
            str(item.tag.post_count),
            item.size_class.name.lower(),
        )

    console.print(table)


# --- Sitemap Command ---


@app.command()
def sitemap(
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Write sitemap.xml into this directory"
    ),
):
    """Build the sitemap from the live content API."""
    settings = get_settings()
    logger = get_logger("postflow.cli")

    async def run():
        with LogContext(logger, "sitemap build"):
            async with create_content_feed_client(settings) as feed:
                entries = await SitemapAssembler(feed, settings).build_sitemap()
            if output_dir is None:
                return entries, None
            return entries, await create_sitemap_writer(output_dir).write(entries)

    entries, path = _run(run())

    if path is None:
        typer.echo(render_sitemap_xml(entries), nl=False)
    else:
        console.print(f"[green]Wrote {len(entries)} URLs to {path}[/green]")


# --- Entry Point ---


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
