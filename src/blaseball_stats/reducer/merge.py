"""Combining freshly reduced tallies with previously persisted ones.

The reprocess floor protects finished history: a fresh tally for a season
at or above the floor replaces the persisted one outright, while seasons
below it keep exactly what was persisted. Players present only on one side
pass through untouched.
"""

from blaseball_stats.domain.tally import PlayerSummary, Tally


def _replace_tracked(
    persisted: dict[int, Tally],
    fresh: dict[int, Tally],
    floor: int,
) -> dict[int, Tally]:
    merged = dict(persisted)
    for season in sorted(fresh):
        if season < floor:
            continue
        tally = fresh[season]
        previous = persisted.get(season)
        if previous is not None:
            if not tally.team:
                tally.team = previous.team
            if not tally.team_name:
                tally.team_name = previous.team_name
        merged[season] = tally
    return dict(sorted(merged.items()))


def merge_summary(
    persisted: PlayerSummary[Tally],
    fresh: PlayerSummary[Tally],
    floor: int,
) -> PlayerSummary[Tally]:
    """Merge one player's summaries; careers are left for the caller to rebuild."""
    return PlayerSummary(
        id=fresh.id,
        tally_type=fresh.tally_type,
        name=fresh.name or persisted.name,
        slug=fresh.slug or persisted.slug,
        seasons=_replace_tracked(persisted.seasons, fresh.seasons, floor),
        postseasons=_replace_tracked(persisted.postseasons, fresh.postseasons, floor),
    )


def merge_summaries(
    persisted: dict[str, PlayerSummary[Tally]],
    fresh: dict[str, PlayerSummary[Tally]],
    floor: int,
) -> dict[str, PlayerSummary[Tally]]:
    merged: dict[str, PlayerSummary[Tally]] = dict(persisted)
    for player_id, summary in fresh.items():
        existing = persisted.get(player_id)
        merged[player_id] = summary if existing is None else merge_summary(existing, summary, floor)
    return merged
