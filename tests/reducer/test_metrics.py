import pytest

from blaseball_stats.domain.tally import BattingTally, PitchingTally
from blaseball_stats.reducer.metrics import (
    finalize_batting,
    finalize_pitching,
    innings_pitched,
    total_bases,
    winning_percentage,
)


class TestBattingMetrics:
    def test_total_bases(self) -> None:
        tally = BattingTally(hits=5, doubles_hit=1, triples_hit=1, home_runs_hit=1)
        assert total_bases(tally) == 2 + 2 + 3 + 4

    def test_finalize(self) -> None:
        tally = BattingTally(at_bats=10, hits=3, home_runs_hit=1, bases_on_balls=2, sacrifice_flies=1)
        finalize_batting(tally)
        assert tally.batting_average == pytest.approx(0.3)
        assert tally.on_base_percentage == pytest.approx(5 / 13)
        assert tally.slugging_percentage == pytest.approx(0.6)
        assert tally.total_bases == 6
        assert tally.on_base_plus_slugging == pytest.approx(tally.on_base_percentage + tally.slugging_percentage)

    def test_zero_denominators(self) -> None:
        tally = BattingTally()
        finalize_batting(tally)
        assert tally.batting_average == 0
        assert tally.on_base_percentage == 0
        assert tally.batting_average_with_runners_in_scoring_position == 0

    def test_risp_average(self) -> None:
        tally = BattingTally(at_bats_with_runners_in_scoring_position=4, hits_with_runners_in_scoring_position=1)
        finalize_batting(tally)
        assert tally.batting_average_with_runners_in_scoring_position == 0.25


class TestPitchingMetrics:
    @pytest.mark.parametrize(
        ("outs", "expected"),
        [(0, 0.0), (1, 0.1), (2, 0.2), (3, 1.0), (7, 2.1), (27, 9.0), (29, 9.2)],
    )
    def test_innings_pitched_uses_tenths_notation(self, outs: int, expected: float) -> None:
        assert innings_pitched(outs) == expected

    def test_winning_percentage(self) -> None:
        assert winning_percentage(0, 0) == 1
        assert winning_percentage(0, 5) == 0
        assert winning_percentage(3, 2) == 0.6

    def test_finalize(self) -> None:
        tally = PitchingTally(
            outs_recorded=27,
            earned_runs=3,
            strikeouts=9,
            bases_on_balls=3,
            hits_allowed=6,
            home_runs=1,
            batters_faced=36,
            wins=1,
        )
        finalize_pitching(tally)
        assert tally.innings_pitched == 9.0
        assert tally.earned_run_average == pytest.approx(3.0)
        assert tally.strikeouts_per_nine == pytest.approx(9.0)
        assert tally.strikeout_rate == pytest.approx(0.25)
        assert tally.walk_rate == pytest.approx(1 / 12)
        assert tally.strikeout_to_walk_ratio == pytest.approx(3.0)
        assert tally.walks_and_hits_per_inning_pitched == pytest.approx(1.0)
        assert tally.winning_percentage == 1

    def test_finalize_without_innings(self) -> None:
        tally = PitchingTally(earned_runs=2, losses=1)
        finalize_pitching(tally)
        assert tally.earned_run_average == 0
        assert tally.hits_allowed_per_nine == 0
        assert tally.winning_percentage == 0
