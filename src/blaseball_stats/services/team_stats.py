from collections.abc import Iterable, Mapping
from typing import Any

from blaseball_stats.domain.tally import PlayerSummary, Tally
from blaseball_stats.shared.naming import slugify


def _grouped(
    summaries: Iterable[PlayerSummary[Tally]],
    team_id: str,
    postseason: bool,
) -> dict[str, list[dict[str, Any]]]:
    grouped: dict[str, list[dict[str, Any]]] = {}
    for summary in summaries:
        for season, tally in summary.scoped(postseason).items():
            if tally.team != team_id:
                continue
            row = {**tally.to_dict(), "id": summary.id, "name": summary.name, "slug": summary.slug}
            grouped.setdefault(str(season), []).append(row)
    return grouped


def _role_stats(summaries: Iterable[PlayerSummary[Tally]], team_id: str) -> dict[str, Any]:
    summaries = list(summaries)
    return {
        "seasons": _grouped(summaries, team_id, postseason=False),
        "postseasons": _grouped(summaries, team_id, postseason=True),
    }


def build_team_stats(
    teams: Iterable[Mapping[str, Any]],
    batters: Mapping[str, PlayerSummary[Tally]],
    pitchers: Mapping[str, PlayerSummary[Tally]],
) -> list[dict[str, Any]]:
    """Attach every season a player spent with a team to that team's entry.

    Players are matched on the team recorded in each tally, so former
    players stay listed under the seasons they played there.
    """
    team_stats: list[dict[str, Any]] = []
    for team in teams:
        team_id = str(team["id"])
        team_stats.append(
            {
                **team,
                "battingStats": _role_stats(batters.values(), team_id),
                "id": team_id,
                "pitchingStats": _role_stats(pitchers.values(), team_id),
                "slug": slugify(team.get("fullName")),
            }
        )
    return team_stats
