#!/usr/bin/env python
"""Load scraped catch records from a JSONL file into the database.

Each line holds one catch with ``name``, ``species``, ``weight`` and ``date``
plus optional ``location``, ``gear`` and ``zone`` fields.

Usage:
    python -m fishlog.scripts.load_catches ./data/catches.jsonl
    python -m fishlog.scripts.load_catches ./data/catches.jsonl --limit 50 --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from fishlog.cache import close_redis, get_cache_client
from fishlog.db.connection import dispose_engine, get_engine, get_session, init_models
from fishlog.db.repositories.catch_repository import CatchRepository
from fishlog.main import (
    _ensure_sqlite_directory,
    get_database_type,
    get_database_url,
    validate_environment,
)
from fishlog.schemas.catch import CatchRecordCreate
from fishlog.services.catch_service import CatchService

BATCH_SIZE = 100

console = Console()


def parse_catch_line(line: str) -> CatchRecordCreate | None:
    """Parse one JSONL line; blank lines yield ``None``.

    Raises ``json.JSONDecodeError`` or ``pydantic.ValidationError`` for
    malformed input so the caller can report the offending line.
    """

    stripped = line.strip()
    if not stripped:
        return None
    return CatchRecordCreate.model_validate(json.loads(stripped))


async def load_catches(
    jsonl_path: Path,
    *,
    service: CatchService,
    limit: int | None = None,
    dry_run: bool = False,
    batch_size: int = BATCH_SIZE,
) -> tuple[int, int]:
    """Load catches from ``jsonl_path`` through ``service``.

    Returns a ``(loaded_count, skipped_count)`` tuple. Records are saved in
    batches of ``batch_size``, each committed by the service; nothing is
    written when ``dry_run`` is set. A missing file raises
    ``FileNotFoundError``.
    """
    if not jsonl_path.exists():
        raise FileNotFoundError(jsonl_path)

    loaded_count = 0
    skipped_count = 0
    batch: list[CatchRecordCreate] = []

    async def flush() -> None:
        nonlocal batch, loaded_count
        loaded_count += len(await service.save_all(batch))
        batch = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Loading catches...", total=None)

        with open(jsonl_path, encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                if limit and loaded_count + len(batch) >= limit:
                    break

                try:
                    record = parse_catch_line(line)
                except json.JSONDecodeError as e:
                    console.print(f"[red]Line {line_num}: JSON decode error: {e}[/red]")
                    skipped_count += 1
                    continue
                except ValidationError as e:
                    console.print(
                        f"[yellow]Line {line_num}: Invalid catch record "
                        f"({e.error_count()} error(s)), skipping[/yellow]"
                    )
                    skipped_count += 1
                    continue

                if record is None:
                    continue

                if dry_run:
                    console.print(
                        f"[cyan]Would load: {record.name} {record.species} "
                        f"{record.weight}kg on {record.date}[/cyan]"
                    )
                    loaded_count += 1
                    continue

                batch.append(record)
                if len(batch) >= batch_size:
                    await flush()
                    progress.update(task, description=f"Loaded {loaded_count} catches...")

        if batch:
            await flush()

    return loaded_count, skipped_count


async def main(args: argparse.Namespace) -> int:
    """Main data loading function."""
    validate_environment()

    console.print("[bold blue]Fishlog Catch Loader[/bold blue]\n")
    if not args.jsonl_path.exists():
        console.print(f"[red]File not found: {args.jsonl_path}[/red]")
        return 1

    db_type = get_database_type()
    console.print(f"Database type: {db_type.upper()}")
    console.print(f"Source: {args.jsonl_path}")
    if args.limit:
        console.print(f"Limit: {args.limit} catches")
    if args.dry_run:
        console.print(
            "[yellow]DRY RUN MODE - No data will be written to database[/yellow]\n"
        )

    if db_type == "sqlite":
        _ensure_sqlite_directory(get_database_url())
    await init_models(get_engine())

    cache = await get_cache_client()
    async with get_session() as session:
        service = CatchService(
            CatchRepository(session), cache=cache, commit=session.commit
        )
        loaded, skipped = await load_catches(
            args.jsonl_path,
            service=service,
            limit=args.limit,
            dry_run=args.dry_run,
        )

    await close_redis()
    await dispose_engine()

    if args.dry_run:
        console.print(f"\n[green]✓ Validated {loaded} catches[/green]")
    else:
        console.print(f"\n[green]✓ Loaded {loaded} catches[/green]")
    if skipped > 0:
        console.print(f"[yellow]Skipped {skipped} records[/yellow]")

    return 0 if skipped == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load scraped catch records from a JSONL file"
    )
    parser.add_argument("jsonl_path", type=Path, help="Path to the JSONL file")
    parser.add_argument(
        "--limit",
        type=int,
        help="Only load the first N catches",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate data without inserting into database",
    )
    return parser


def run() -> None:
    sys.exit(asyncio.run(main(build_parser().parse_args())))


if __name__ == "__main__":
    run()
