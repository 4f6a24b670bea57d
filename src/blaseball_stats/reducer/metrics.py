"""Rate statistics derived from batting and pitching tallies.

Every function guards its own denominator and returns 0 when it is zero,
with the single exception of :func:`winning_percentage`, which treats a
pitcher without a decision as undefeated.
"""

import math

from blaseball_stats.domain.tally import BattingTally, PitchingTally


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0


def _per_nine(stat: float, innings_pitched: float) -> float:
    return stat / innings_pitched * 9 if innings_pitched > 0 else 0


# Batting


def singles_hit(t: BattingTally) -> int:
    return t.hits - (t.doubles_hit + t.triples_hit + t.home_runs_hit)


def total_bases(t: BattingTally) -> int:
    return singles_hit(t) + t.doubles_hit * 2 + t.triples_hit * 3 + t.home_runs_hit * 4


def batting_average(t: BattingTally) -> float:
    return _ratio(t.hits, t.at_bats)


def on_base_percentage(t: BattingTally) -> float:
    return _ratio(t.hits + t.bases_on_balls, t.at_bats + t.bases_on_balls + t.sacrifice_flies)


def slugging_percentage(t: BattingTally) -> float:
    return _ratio(total_bases(t), t.at_bats)


def batting_average_with_runners_in_scoring_position(t: BattingTally) -> float:
    return _ratio(t.hits_with_runners_in_scoring_position, t.at_bats_with_runners_in_scoring_position)


def finalize_batting(t: BattingTally) -> None:
    t.batting_average = batting_average(t)
    t.on_base_percentage = on_base_percentage(t)
    t.slugging_percentage = slugging_percentage(t)
    t.total_bases = total_bases(t)
    # Reads the two rates above.
    t.on_base_plus_slugging = t.on_base_percentage + t.slugging_percentage
    t.batting_average_with_runners_in_scoring_position = batting_average_with_runners_in_scoring_position(t)


# Pitching


def innings_pitched(outs_recorded: int) -> float:
    """Innings in baseball's tenths notation: 7 outs is 2.1, not 2.333."""
    whole = math.trunc(outs_recorded / 3)
    partial = outs_recorded % 3
    return round(whole + partial / 10, 1)


def winning_percentage(wins: int, losses: int) -> float:
    if wins > 0:
        return wins / (wins + losses)
    if losses != 0:
        return 0
    return 1


def finalize_pitching(t: PitchingTally) -> None:
    ip = innings_pitched(t.outs_recorded)
    t.innings_pitched = ip
    t.earned_run_average = 9 * t.earned_runs / ip if ip > 0 else 0
    t.bases_on_balls_per_nine = _per_nine(t.bases_on_balls, ip)
    t.hits_allowed_per_nine = _per_nine(t.hits_allowed, ip)
    t.home_runs_per_nine = _per_nine(t.home_runs, ip)
    t.strikeouts_per_nine = _per_nine(t.strikeouts, ip)
    t.strikeout_rate = _ratio(t.strikeouts, t.batters_faced)
    t.walk_rate = _ratio(t.bases_on_balls, t.batters_faced)
    t.strikeout_to_walk_ratio = _ratio(t.strikeouts, t.bases_on_balls)
    t.walks_and_hits_per_inning_pitched = _ratio(t.bases_on_balls + t.hits_allowed, ip)
    t.winning_percentage = winning_percentage(t.wins, t.losses)
