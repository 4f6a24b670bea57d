from collections.abc import Iterable

from blaseball_stats.domain.player import PlayerRecord


def combine_players(*rosters: Iterable[PlayerRecord]) -> list[PlayerRecord]:
    """Union of several rosters; the first record seen for an id wins."""
    players: dict[str, PlayerRecord] = {}
    for roster in rosters:
        for record in roster:
            players.setdefault(record.id, record)
    return list(players.values())
