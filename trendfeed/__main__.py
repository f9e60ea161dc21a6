"""CLI entry point: python -m trendfeed [command]"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console()


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def cmd_trends(args):
    """Aggregate trending queries once and print them."""
    from trendfeed.aggregator import fetch_from_multiple_sources, with_fallback
    from trendfeed.config import load_settings

    settings = load_settings()
    setup_logging(settings.log_level)

    if args.discussion:
        settings.discussion_enabled = True
    if args.uniform:
        settings.shuffle_mode = "uniform"

    errors = settings.validate()
    if errors:
        for err in errors:
            console.print(f"[red]Config error: {err}[/red]")
        sys.exit(1)

    queries = with_fallback(asyncio.run(fetch_from_multiple_sources(settings)))

    if args.json:
        console.print_json(json.dumps([q.model_dump() for q in queries]))
        return

    table = Table(title="Trending Queries")
    table.add_column("Category", style="cyan")
    table.add_column("Icon", style="dim")
    table.add_column("Query")
    for q in queries:
        table.add_row(q.category, q.icon, q.text)
    console.print(table)


def cmd_followups(args):
    """Generate follow-up questions for a JSON conversation history file."""
    from trendfeed.config import load_settings
    from trendfeed.followups import generate_trending_queries

    settings = load_settings()
    setup_logging(settings.log_level)

    errors = settings.validate()
    if errors:
        for err in errors:
            console.print(f"[red]Config error: {err}[/red]")
        sys.exit(1)

    history = json.loads(Path(args.history).read_text())
    if not isinstance(history, list) or not history:
        console.print("[red]History file must contain a non-empty JSON array of messages[/red]")
        sys.exit(1)

    result = asyncio.run(generate_trending_queries(history, settings))
    for i, question in enumerate(result.questions, 1):
        console.print(f"  {i}. {question}")


def cmd_healthcheck(args):
    """Run health checks on configuration and upstream feeds."""
    from trendfeed.config import load_settings
    from trendfeed.healthcheck import run_all_checks

    settings = load_settings()
    setup_logging(settings.log_level)

    console.print("\n[bold cyan]TRENDFEED HEALTH CHECK[/bold cyan]")
    console.print("━" * 40)

    results = run_all_checks(settings)
    all_ok = True

    for result in results:
        icon = "[green]PASS[/green]" if result.ok else "[red]FAIL[/red]"
        console.print(f"  {icon} {result.name}: {result.message}")
        if not result.ok:
            all_ok = False

    console.print("━" * 40)
    if all_ok:
        console.print("[green]All checks passed![/green]")
    else:
        console.print("[red]Some checks failed. Fix the issues above.[/red]")
        sys.exit(1)


def cmd_web(args):
    """Start the API server."""
    import uvicorn

    from trendfeed.config import load_settings

    settings = load_settings()
    setup_logging(settings.log_level)

    host = args.host or settings.web_host
    port = args.port or settings.web_port
    console.print(f"\n[bold cyan]TRENDFEED[/bold cyan] - API at http://{host}:{port}")
    uvicorn.run("trendfeed.web.app:create_app", factory=True, host=host, port=port, reload=False)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="trendfeed",
        description="trendfeed - trending queries and follow-up questions for search",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # trends
    trends_parser = subparsers.add_parser("trends", help="Fetch and print trending queries")
    trends_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    trends_parser.add_argument("--discussion", action="store_true", help="Include Reddit questions for this run")
    trends_parser.add_argument("--uniform", action="store_true", help="Use a uniform shuffle for this run")
    trends_parser.set_defaults(func=cmd_trends)

    # followups
    followups_parser = subparsers.add_parser("followups", help="Generate follow-up questions from a history file")
    followups_parser.add_argument("history", help="Path to a JSON array of {role, content} messages")
    followups_parser.set_defaults(func=cmd_followups)

    # healthcheck
    health_parser = subparsers.add_parser("healthcheck", help="Run health checks on config and feeds")
    health_parser.set_defaults(func=cmd_healthcheck)

    # web
    web_parser = subparsers.add_parser("web", help="Start the API server")
    web_parser.add_argument("--host", type=str, help="Host to bind to")
    web_parser.add_argument("--port", type=int, help="Port to bind to")
    web_parser.set_defaults(func=cmd_web)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
