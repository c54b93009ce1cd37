from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from fishlog.scripts.load_catches import (
    build_parser,
    load_catches,
    main,
    parse_catch_line,
)
from fishlog.services.catch_service import CatchService
from tests.support.in_memory_repositories import InMemoryCatchRepository


def _write_jsonl(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _catch_line(day: int, weight: float = 5.0) -> str:
    return json.dumps(
        {"name": "Kari", "species": "Laks", "weight": weight, "date": f"2022-07-{day:02d}"}
    )


def test_parse_catch_line() -> None:
    record = parse_catch_line(_catch_line(3, 7.5))

    assert record is not None
    assert (record.date, record.weight) == (date(2022, 7, 3), 7.5)
    assert parse_catch_line("   ") is None
    with pytest.raises(ValidationError):
        parse_catch_line(json.dumps({"name": "Kari", "species": "Laks"}))


@pytest.mark.asyncio
async def test_load_catches_skips_malformed_lines_and_commits_batches(tmp_path: Path) -> None:
    source = _write_jsonl(
        tmp_path / "catches.jsonl",
        [
            _catch_line(1),
            "{broken json",
            _catch_line(2),
            "",
            json.dumps({"name": "Kari", "species": "Laks", "weight": -3, "date": "2022-07-02"}),
            _catch_line(3),
        ],
    )
    repository = InMemoryCatchRepository()
    commits: list[int] = []

    async def _commit() -> None:
        commits.append(len(await repository.find_all()))

    loaded, skipped = await load_catches(
        source,
        service=CatchService(repository, commit=_commit),
        batch_size=2,
    )

    assert (loaded, skipped) == (3, 2)
    assert commits == [2, 3]
    assert repository.save_calls == 2


@pytest.mark.asyncio
async def test_load_catches_respects_limit(tmp_path: Path) -> None:
    source = _write_jsonl(tmp_path / "catches.jsonl", [_catch_line(day) for day in range(1, 8)])
    repository = InMemoryCatchRepository()

    loaded, skipped = await load_catches(source, service=CatchService(repository), limit=4)

    assert (loaded, skipped) == (4, 0)
    assert len(await repository.find_all()) == 4


@pytest.mark.asyncio
async def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    source = _write_jsonl(tmp_path / "catches.jsonl", [_catch_line(1), _catch_line(2)])
    repository = InMemoryCatchRepository()

    loaded, skipped = await load_catches(
        source, service=CatchService(repository), dry_run=True
    )

    assert (loaded, skipped) == (2, 0)
    assert await repository.find_all() == []


@pytest.mark.asyncio
async def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        await load_catches(
            tmp_path / "absent.jsonl", service=CatchService(InMemoryCatchRepository())
        )


@pytest.mark.asyncio
async def test_main_exits_non_zero_for_missing_source(tmp_path: Path) -> None:
    args = build_parser().parse_args([str(tmp_path / "absent.jsonl")])

    assert await main(args) == 1


def test_parser_options() -> None:
    args = build_parser().parse_args(["catches.jsonl", "--limit", "10", "--dry-run"])

    assert args.jsonl_path == Path("catches.jsonl")
    assert args.limit == 10
    assert args.dry_run is True
