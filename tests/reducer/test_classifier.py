from typing import Any

from blaseball_stats.domain.snapshot import GameSnapshot, Scope
from blaseball_stats.domain.stat_event import EventKind, Incineration, PlayerSighting, StatEvent
from blaseball_stats.ingest.normalizer import normalize_snapshot
from blaseball_stats.reducer.classifier import EventClassifier
from blaseball_stats.reducer.roles import BATTING, PITCHING
from tests.helpers import game


def _snapshot(**overrides: Any) -> GameSnapshot:
    snapshot = normalize_snapshot(game(**overrides))
    assert snapshot is not None
    return snapshot


def _stats(observations: list[Any], player_id: str) -> dict[str, float]:
    totals: dict[str, float] = {}
    for o in observations:
        if isinstance(o, StatEvent) and o.player_id == player_id:
            totals[o.stat] = totals.get(o.stat, 0) + o.amount
    return totals


class TestBattingClassification:
    def test_first_tick_only_sights_and_counts_appearance(self) -> None:
        classifier = EventClassifier(BATTING)
        observations = classifier.classify(None, _snapshot(awayBatter="P1", lastUpdate="P0 hits a Single!"))
        sightings = [o for o in observations if isinstance(o, PlayerSighting)]
        assert [s.player_id for s in sightings] == ["P1"]
        assert _stats(observations, "P1") == {"appearances": 1}

    def test_appearance_counted_once_per_game(self) -> None:
        classifier = EventClassifier(BATTING)
        first = _snapshot(awayBatter="P1", lastUpdate="a")
        second = _snapshot(awayBatter="P1", lastUpdate="b")
        classifier.classify(None, first)
        assert "appearances" not in _stats(classifier.classify(first, second), "P1")

    def test_play_is_credited_to_previous_batter(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", awayBatterName="One", lastUpdate="Game start")
        curr = _snapshot(awayBatter="P2", lastUpdate="One hits a Single!")
        observations = classifier.classify(prev, curr)
        assert _stats(observations, "P1") == {"plate_appearances": 1, "at_bats": 1, "hits": 1}
        previous_sighting = next(o for o in observations if isinstance(o, PlayerSighting) and o.player_id == "P1")
        assert previous_sighting.update_roster is False

    def test_scoring_position_stats(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", basesOccupied=[1], baseRunners=["R1"])
        curr = _snapshot(awayBatter="P2", lastUpdate="P1 hits a Double!", basesOccupied=[1], baseRunners=["P1"])
        stats = _stats(classifier.classify(prev, curr), "P1")
        assert stats["at_bats_with_runners_in_scoring_position"] == 1
        assert stats["hits_with_runners_in_scoring_position"] == 1

    def test_explicit_scorer_count(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", basesOccupied=[2, 1], baseRunners=["R3", "R2"], halfInningScore=0)
        curr = _snapshot(awayBatter="P2", lastUpdate="P1 hits a Single! 2 scores", halfInningScore=2)
        observations = classifier.classify(prev, curr)
        assert _stats(observations, "R3") == {"runs_scored": 1}
        assert _stats(observations, "R2") == {"runs_scored": 1}
        assert _stats(observations, "P1")["runs_batted_in"] == 2

    def test_single_scorer(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", basesOccupied=[2, 0], baseRunners=["R3", "R1"], awayScore=1)
        curr = _snapshot(
            awayBatter="P2",
            lastUpdate="P1 hit a sacrifice fly. Runner Three scores!",
            awayScore=2,
            halfInningScore=None,
        )
        observations = classifier.classify(prev, curr)
        assert _stats(observations, "R3") == {"runs_scored": 1}
        assert _stats(observations, "R1") == {}
        assert _stats(observations, "P1")["runs_batted_in"] == 1

    def test_negative_score_delta_earns_no_rbi(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", halfInningScore=2)
        curr = _snapshot(awayBatter="P2", lastUpdate="Runner scores!", halfInningScore=1)
        assert "runs_batted_in" not in _stats(classifier.classify(prev, curr), "P1")

    def test_stolen_base(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", basesOccupied=[0], baseRunners=["R1"])
        curr = _snapshot(awayBatter="P1", lastUpdate="Runner One steals second base!", basesOccupied=[1])
        assert _stats(classifier.classify(prev, curr), "R1") == {"stolen_bases": 1}

    def test_steal_of_home_lines_up_remaining_runners(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", basesOccupied=[2, 0], baseRunners=["R3", "R1"])
        curr = _snapshot(awayBatter="P1", lastUpdate="Runner Three steals home!", basesOccupied=[0], baseRunners=["R1"])
        observations = classifier.classify(prev, curr)
        assert _stats(observations, "R3") == {"stolen_bases": 1}
        assert _stats(observations, "R1") == {}

        prev = _snapshot(awayBatter="P1", basesOccupied=[2, 1], baseRunners=["R3", "R2"])
        curr = _snapshot(awayBatter="P1", lastUpdate="Runner Three steals home!", basesOccupied=[1], baseRunners=["R2"])
        assert _stats(classifier.classify(prev, curr), "R2") == {}

    def test_caught_stealing_matches_runner_by_name(self) -> None:
        names = {"R1": "Runner One"}
        classifier = EventClassifier(BATTING, name_of=names.get)
        prev = _snapshot(awayBatter="P1", basesOccupied=[0], baseRunners=["R1"])
        curr = _snapshot(awayBatter="P1", lastUpdate="Runner One gets caught stealing second base.")
        assert _stats(classifier.classify(prev, curr), "R1") == {"caught_stealing": 1}

    def test_completed_game_forgets_its_batters(self) -> None:
        classifier = EventClassifier(BATTING)
        classifier.classify(None, _snapshot(awayBatter="P1", gameComplete=True, lastUpdate="Game over."))
        replay = _snapshot(id="G1", awayBatter="P1", lastUpdate="a")
        assert _stats(classifier.classify(None, replay), "P1") == {"appearances": 1}

    def test_incineration(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot(awayBatter="P1", day=12)
        curr = _snapshot(awayBatter="P2", lastUpdate="Rogue Umpire incinerated Visitors hitter Player One!")
        incinerations = [o for o in classifier.classify(prev, curr) if isinstance(o, Incineration)]
        assert incinerations == [
            Incineration(role=BATTING.role, player_name="Player One", game_id="G1", day=12, season=6)
        ]

    def test_missing_batter_emits_nothing(self) -> None:
        classifier = EventClassifier(BATTING)
        prev = _snapshot()
        curr = _snapshot(lastUpdate="Someone hits a Single!")
        assert classifier.classify(prev, curr) == []


class TestPitchingClassification:
    def test_sights_both_pitchers(self) -> None:
        classifier = EventClassifier(PITCHING)
        observations = classifier.classify(None, _snapshot(homePitcher="HP", awayPitcher="AP"))
        assert [o.player_id for o in observations if isinstance(o, PlayerSighting)] == ["HP", "AP"]

    def test_play_is_credited_to_previous_pitcher(self) -> None:
        classifier = EventClassifier(PITCHING)
        prev = _snapshot(homePitcher="HP", awayPitcher="AP")
        curr = _snapshot(homePitcher="HP", awayPitcher="AP", lastUpdate="Batter strikes out looking.")
        stats = _stats(classifier.classify(prev, curr), "HP")
        assert stats == {"outs_recorded": 1, "pitch_count": 1, "strikeouts": 1}

    def test_runs_charge_the_opposing_pitcher(self) -> None:
        classifier = EventClassifier(PITCHING)
        prev = _snapshot(homePitcher="HP", awayPitcher="AP", awayScore=1, homeScore=0)
        curr = _snapshot(homePitcher="HP", awayPitcher="AP", awayScore=3, homeScore=0, lastUpdate="Runner scores!")
        observations = classifier.classify(prev, curr)
        assert _stats(observations, "HP")["earned_runs"] == 2
        assert "earned_runs" not in _stats(observations, "AP")

    def test_game_over_decisions(self) -> None:
        classifier = EventClassifier(PITCHING)
        prev = _snapshot(homePitcher="HP", awayPitcher="AP", homeScore=5, awayScore=0)
        curr = _snapshot(
            homePitcher="HP",
            awayPitcher="AP",
            homeScore=5,
            awayScore=0,
            gameComplete=True,
            lastUpdate="Game over.",
        )
        observations = classifier.classify(prev, curr)
        home = _stats(observations, "HP")
        away = _stats(observations, "AP")
        assert home["wins"] == 1
        assert home["appearances"] == 1
        assert home["quality_starts"] == 1
        assert home["shutouts"] == 1
        assert away["losses"] == 1
        assert "quality_starts" not in away

    def test_batting_for_counts_batter_faced(self) -> None:
        classifier = EventClassifier(PITCHING)
        curr = _snapshot(homePitcher="HP", lastUpdate="Someone batting for the Visitors.")
        assert _stats(classifier.classify(None, curr), "HP") == {"batters_faced": 1}

    def test_scope_follows_snapshot(self) -> None:
        classifier = EventClassifier(PITCHING)
        curr = _snapshot(homePitcher="HP", isPostseason=True, lastUpdate="Someone batting for the Visitors.")
        events = [o for o in classifier.classify(None, curr) if isinstance(o, StatEvent)]
        assert events[0].scope == Scope(season=6, postseason=True)
        assert events[0].kind is EventKind.BATTER_FACED

    def test_shame_does_not_reduce_earned_runs(self) -> None:
        classifier = EventClassifier(PITCHING)
        prev = _snapshot(homePitcher="HP", awayPitcher="AP", awayScore=3, homeScore=2)
        curr = _snapshot(
            homePitcher="HP", awayPitcher="AP", awayScore=1, homeScore=-1, lastUpdate="The Visitors were shamed!"
        )
        observations = classifier.classify(prev, curr)
        assert "earned_runs" not in _stats(observations, "HP")
        assert "earned_runs" not in _stats(observations, "AP")

    def test_finished_game_is_not_rated_twice(self) -> None:
        classifier = EventClassifier(PITCHING)
        prev = _snapshot(homePitcher="HP", awayPitcher="AP", homeScore=5, awayScore=0, gameComplete=True)
        curr = _snapshot(
            homePitcher="HP",
            awayPitcher="AP",
            homeScore=5,
            awayScore=0,
            gameComplete=True,
            lastUpdate="Game over.",
        )
        stats = _stats(classifier.classify(prev, curr), "HP")
        assert "quality_starts" not in stats
        assert "shutouts" not in stats
