#!/usr/bin/env python3
"""
Database seeder for development and test environments.

Populates the users and user_credentials tables from the JSON seed file,
or clears them.

Usage:
    uv run python run_seeder.py seed     # Seed empty tables
    uv run python run_seeder.py clear    # Remove all seeded rows
    uv run python run_seeder.py reset    # Clear, then seed

Configuration:
    Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY in your .env file.
    SEED_DATA_PATH overrides the bundled modules/seeder/data/users.json.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from shared.config import get_settings
from modules.seeder import SeederService, create_seeder_service

console = Console()
logger = logging.getLogger("run_seeder")


COMMANDS: dict[str, tuple[str, Callable[[SeederService], object]]] = {
    "seed": ("Seed the database with initial data", lambda s: s.seed_all()),
    "clear": ("Clear all data from the database", lambda s: s.clear()),
    "reset": ("Clear and re-seed the database", lambda s: s.reset_and_seed()),
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def print_commands() -> None:
    console.print("Available commands:")
    for name, (description, _) in COMMANDS.items():
        console.print(f"  [cyan]{name:<6}[/cyan] {description}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(
        description="Seed or clear the Contraqo database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run python run_seeder.py seed    Seed the database with initial data
  uv run python run_seeder.py clear   Clear all data from the database
  uv run python run_seeder.py reset   Clear and re-seed the database
        """
    )
    parser.add_argument(
        "command",
        nargs="?",
        help="One of: " + ", ".join(COMMANDS),
    )
    parser.add_argument(
        "--data",
        metavar="PATH",
        type=Path,
        help="Seed file to use instead of the configured one",
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    console.print(
        f"[bold]{settings.app_name} v{settings.app_version}[/bold] "
        f"database seeder ({settings.environment})"
    )
    console.print()

    if args.command not in COMMANDS:
        if args.command:
            console.print(f"[red]Unknown command:[/red] {args.command}")
        else:
            console.print("[red]No command given.[/red]")
        print_commands()
        return 1

    _, run = COMMANDS[args.command]
    start = time.perf_counter()

    try:
        service = create_seeder_service(settings, data_path=args.data)
        run(service)
    except Exception as e:
        logger.error("Contraqo Seeder failed: %s", e, exc_info=settings.debug)
        console.print(f"[red]✗ Seeder failed:[/red] {e}")
        return 1

    duration_ms = int((time.perf_counter() - start) * 1000)
    logger.info("Contraqo Seeder completed successfully in %dms", duration_ms)
    console.print(f"[green]✓ Completed '{args.command}' in {duration_ms}ms[/green]")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
