"""Query parameter dependencies shared by the routers."""

from fastapi import Query

from fishlog.settings import get_settings


def species_param(
    species: str | None = Query(
        None,
        min_length=1,
        pattern=r"^\s*\S",
        description="Species to aggregate, e.g. 'Laks'. Defaults to DEFAULT_SPECIES.",
    ),
) -> str:
    if species is None:
        return get_settings().default_species
    # Stored species are stripped on ingest.
    return species.strip()
