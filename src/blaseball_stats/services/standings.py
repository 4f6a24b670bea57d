"""Season standings folded from completed regular-season game results.

Games are applied in chronological order. Each game updates both teams'
win/loss totals, streaks, split records and head-to-head division and
league records. After every game of a season has been applied, teams are
ranked within the sport, each league and each division by wins. Then
games back and the magic and elimination numbers are filled in.

Two season-ending weather outcomes rewrite history. "Sun 2" hands the
named team an extra win and ten runs. "Black Hole" takes a win away from
the named team and gives ten runs to its opponent.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from blaseball_stats.domain.standings import (
    DivisionSplitRecord,
    GameResult,
    LeagueSplitRecord,
    LeagueStructure,
    SeasonStructure,
    SplitRecord,
    TeamRecord,
    weather_name,
)
from blaseball_stats.shared.naming import slugify

logger = logging.getLogger(__name__)

GAMES_IN_SEASON = 99
PLAYOFF_SPOTS = 4

type Side = Literal["home", "away"]
type Standings = dict[str, list[TeamRecord]]


def _team(side: Side, game: GameResult) -> str | None:
    return game.home_team if side == "home" else game.away_team


def _team_name(side: Side, game: GameResult) -> str | None:
    return game.home_team_name if side == "home" else game.away_team_name


def _nickname(side: Side, game: GameResult) -> str | None:
    return game.home_team_nickname if side == "home" else game.away_team_nickname


def _names_team(nickname: str | None, outcome: str) -> bool:
    return bool(nickname and nickname in outcome)


def _score(side: Side, game: GameResult) -> float:
    return game.home_score if side == "home" else game.away_score


def count_team_runs(side: Side, game: GameResult) -> float:
    runs = _score(side, game)
    nickname = _nickname(side, game)
    for outcome in game.outcomes:
        if "Sun 2" in outcome and _names_team(nickname, outcome):
            runs += 10
        elif "Black Hole" in outcome and not _names_team(nickname, outcome):
            runs += 10
    return runs


def count_team_wins(side: Side, winner: Side, game: GameResult) -> int:
    wins = 1 if side == winner else 0
    nickname = _nickname(side, game)
    for outcome in game.outcomes:
        if "Sun 2" in outcome and _names_team(nickname, outcome):
            wins += 1
        elif "Black Hole" in outcome and _names_team(nickname, outcome):
            wins -= 1
    return wins


def round_tenth(value: float) -> float:
    """Round half up to one decimal place, keeping whole numbers integral."""
    rounded = math.floor(value * 10 + 0.5) / 10
    return int(rounded) if rounded.is_integer() else rounded


def games_back(leader: TeamRecord, record: TeamRecord) -> str:
    return str(round_tenth((leader.win_differential - record.win_differential) / 2))


def _pct(wins: int, losses: int) -> float:
    return wins / (wins + losses) if wins + losses else 0


def _add_member(groups: dict[str, list[TeamRecord]], group_id: str, record: TeamRecord) -> None:
    members = groups.setdefault(group_id, [])
    if all(member.team_id != record.team_id for member in members):
        members.append(record)


class SeasonStandings:
    """Mutable standings for a single season."""

    def __init__(
        self,
        season: int,
        structure: SeasonStructure | None,
        *,
        games_in_season: int = GAMES_IN_SEASON,
        playoff_spots: int = PLAYOFF_SPOTS,
    ) -> None:
        self._season = season
        self._structure = structure
        self._games_in_season = games_in_season
        self._playoff_spots = playoff_spots
        self.records: dict[str, TeamRecord] = {}
        self.divisions: dict[str, list[TeamRecord]] = {}
        self.leagues: dict[str, list[TeamRecord]] = {}
        if structure is None:
            logger.warning("No league structure for season %d, divisions and leagues will be empty", season)

    def _record_for(self, side: Side, game: GameResult) -> TeamRecord:
        team_id = _team(side, game) or ""
        record = self.records.get(team_id)
        if record is None:
            name = _team_name(side, game)
            record = TeamRecord(team_id=team_id, team_name=name, team_slug=slugify(name), season=game.season)
            self.records[team_id] = record
        return record

    def record_game(self, game: GameResult) -> bool:
        """Apply one game; returns False when the game does not count."""
        if not game.game_complete or game.is_postseason:
            return False

        winner: Side = "home" if game.home_score > game.away_score else "away"
        loser: Side = "away" if winner == "home" else "home"
        structure = self._structure
        winner_league = structure.subleague_of(_team(winner, game)) if structure else None
        loser_league = structure.subleague_of(_team(loser, game)) if structure else None
        winner_division = structure.division_of(_team(winner, game)) if structure else None
        loser_division = structure.division_of(_team(loser, game)) if structure else None
        if structure is not None and (winner_division is None or loser_division is None):
            logger.warning("Unable to locate division for a team in game %s", game.id)

        won = self._record_for(winner, game)
        lost = self._record_for(loser, game)
        won.streak.extend(True)
        lost.streak.extend(False)

        won.games_played += 1
        lost.games_played += 1
        won.wins += count_team_wins(winner, winner, game)
        lost.wins += count_team_wins(loser, winner, game)
        lost.losses += 1
        won.winning_percentage = _pct(won.wins, won.losses)
        lost.winning_percentage = _pct(lost.wins, lost.losses)

        winner_runs = count_team_runs(winner, game)
        loser_runs = count_team_runs(loser, game)
        won.runs_allowed += loser_runs
        lost.runs_allowed += winner_runs
        won.runs_scored += winner_runs
        lost.runs_scored += loser_runs
        won.run_differential = round_tenth(won.run_differential + winner_runs - loser_runs)
        lost.run_differential = round_tenth(lost.run_differential - (winner_runs - loser_runs))

        if winner_league is not None and winner_league == loser_league:
            won.league_record.wins += 1
            won.league_record.pct = _pct(won.league_record.wins, won.league_record.losses)
            lost.league_record.losses += 1
            lost.league_record.pct = _pct(lost.league_record.wins, lost.league_record.losses)

        self._record_splits(game, winner, loser, won, lost)

        if winner_division is not None and loser_division is not None:
            won.division_records.setdefault(
                loser_division.id,
                DivisionSplitRecord(division_id=loser_division.id, division_name=loser_division.name or ""),
            ).record_win()
            lost.division_records.setdefault(
                winner_division.id,
                DivisionSplitRecord(division_id=winner_division.id, division_name=winner_division.name or ""),
            ).record_loss()

        if winner_league is not None and loser_league is not None:
            won.league_records.setdefault(
                loser_league.id,
                LeagueSplitRecord(league_id=loser_league.id, league_name=loser_league.name or ""),
            ).record_win()
            lost.league_records.setdefault(
                winner_league.id,
                LeagueSplitRecord(league_id=winner_league.id, league_name=winner_league.name or ""),
            ).record_loss()

        if game.weather is not None:
            weather = weather_name(game.weather)
            won.weather_records.setdefault(game.weather, SplitRecord(type=weather)).record_win()
            lost.weather_records.setdefault(game.weather, SplitRecord(type=weather)).record_loss()

        if winner_division is not None:
            _add_member(self.divisions, winner_division.id, won)
        if loser_division is not None:
            _add_member(self.divisions, loser_division.id, lost)
        if winner_league is not None:
            _add_member(self.leagues, winner_league.id, won)
        if loser_league is not None:
            _add_member(self.leagues, loser_league.id, lost)
        return True

    @staticmethod
    def _record_splits(game: GameResult, winner: Side, loser: Side, won: TeamRecord, lost: TeamRecord) -> None:
        won.split_records[winner].record_win()
        lost.split_records[loser].record_loss()
        if game.inning > 8:
            won.split_records["extraInnings"].record_win()
            lost.split_records["extraInnings"].record_loss()
        # Percentages were already updated with this game's result.
        if lost.winning_percentage > 0.5:
            won.split_records["winners"].record_win()
        if won.winning_percentage > 0.5:
            lost.split_records["winners"].record_loss()
        if abs(game.home_score - game.away_score) == 1:
            won.split_records["oneRun"].record_win()
            lost.split_records["oneRun"].record_loss()
        if game.shame:
            won.split_records["shame"].record_win()
            lost.split_records["shame"].record_loss()

    def rank(self) -> Standings:
        """Fill ranks, games back and clinch numbers; returns records by division."""
        if self.records:
            sport = _by_wins(self.records.values())
            sport[0].sport_leader = True
            for index, record in enumerate(sport):
                record.sport_rank = index + 1
                record.sport_games_back = "-" if index == 0 else games_back(sport[0], record)

        for division_id, members in self.divisions.items():
            ranked = _by_wins(members)
            ranked[0].division_leader = True
            for index, record in enumerate(ranked):
                record.division_rank = index + 1
                record.division_games_back = "-" if index == 0 else games_back(ranked[0], record)
            self.divisions[division_id] = ranked

        for league_id, members in self.leagues.items():
            ranked = _by_wins(members)
            ranked[0].league_leader = True
            self._clinch_numbers(league_id, ranked)
            for index, record in enumerate(ranked):
                record.league_rank = index + 1
                record.league_games_back = "-" if index == 0 else games_back(ranked[0], record)
                record.games_back = record.league_games_back
            self.leagues[league_id] = ranked
        return self.divisions

    def _clinch_numbers(self, league_id: str, ranked: list[TeamRecord]) -> None:
        spots = self._playoff_spots
        if len(ranked) <= spots:
            logger.warning("League %s has only %d teams, skipping magic numbers", league_id, len(ranked))
            return
        first_out = ranked[spots]
        last_in = ranked[spots - 1]
        for record in ranked[:spots]:
            magic = self._games_in_season + 1 - record.wins - first_out.losses
            record.magic_number = "X" if magic <= 0 else str(magic)
            record.clinched = magic <= 0
            record.elimination_number = "-"
        for record in ranked[spots:]:
            tragic = self._games_in_season + 1 - last_in.wins - record.losses
            record.magic_number = "-"
            record.elimination_number = "E" if tragic <= 0 else str(tragic)


def _by_wins(records: Iterable[TeamRecord]) -> list[TeamRecord]:
    return sorted(records, key=lambda r: r.wins, reverse=True)


def _games(days: Mapping[int, list[dict[str, Any]]]) -> Iterable[GameResult]:
    for day in sorted(days):
        for raw in days[day]:
            try:
                yield GameResult.from_dict(raw)
            except TypeError:
                logger.warning("Skipping malformed game record on day %d: %s", day, raw.get("id") or raw.get("_id"))


def generate_standings(
    games: Mapping[int, Mapping[int, list[dict[str, Any]]]],
    structure: LeagueStructure,
    *,
    games_in_season: int = GAMES_IN_SEASON,
    playoff_spots: int = PLAYOFF_SPOTS,
) -> dict[int, Standings]:
    """Build standings for every season present in *games*."""
    standings: dict[int, Standings] = {}
    for season in sorted(games):
        accumulator = SeasonStandings(
            season,
            structure.for_season(season),
            games_in_season=games_in_season,
            playoff_spots=playoff_spots,
        )
        counted = sum(accumulator.record_game(game) for game in _games(games[season]))
        standings[season] = accumulator.rank()
        logger.info("Season %d standings built from %d games", season, counted)
    return standings
