import pytest

from blaseball_stats.domain.tally import BattingTally, PitchingTally, PlayerSummary


class TestTally:
    def test_counter_and_derived_names_are_disjoint(self) -> None:
        assert "hits" in BattingTally.counter_names()
        assert "batting_average" in BattingTally.derived_names()
        assert not set(BattingTally.counter_names()) & set(BattingTally.derived_names())

    def test_team_fields_are_neither(self) -> None:
        assert "team" not in PitchingTally.counter_names()
        assert "team" not in PitchingTally.derived_names()

    def test_increment(self) -> None:
        tally = BattingTally()
        tally.increment("hits")
        tally.increment("runs_batted_in", 3)
        assert tally.hits == 1
        assert tally.runs_batted_in == 3

    def test_increment_rejects_unknown_and_derived_stats(self) -> None:
        tally = BattingTally()
        with pytest.raises(ValueError, match="no counter"):
            tally.increment("batting_average")
        with pytest.raises(ValueError, match="no counter"):
            tally.increment("earned_runs")

    def test_add_sums_counters_only(self) -> None:
        a = PitchingTally(team="T1", wins=2, outs_recorded=10, innings_pitched=3.1)
        b = PitchingTally(team="T2", wins=1, outs_recorded=5, innings_pitched=1.2)
        a.add(b)
        assert a.wins == 3
        assert a.outs_recorded == 15
        assert a.innings_pitched == 3.1
        assert a.team == "T1"

    def test_to_dict_uses_camel_case(self) -> None:
        data = BattingTally(team="T1", team_name="Team One", at_bats=4).to_dict()
        assert data["atBats"] == 4
        assert data["teamName"] == "Team One"
        assert "onBasePlusSlugging" in data

    def test_from_dict_fills_missing_with_zero(self) -> None:
        tally = BattingTally.from_dict({"hits": 5, "unknownStat": 9})
        assert tally.hits == 5
        assert tally.at_bats == 0


class TestPlayerSummary:
    def test_careers_default_to_empty_tallies(self) -> None:
        summary = PlayerSummary(id="p1", tally_type=BattingTally)
        assert isinstance(summary.career_season, BattingTally)
        assert isinstance(summary.career_postseason, BattingTally)
        assert summary.career_season is not summary.career_postseason

    def test_scoped(self) -> None:
        summary = PlayerSummary(
            id="p1",
            tally_type=BattingTally,
            seasons={5: BattingTally(hits=1)},
            postseasons={5: BattingTally(hits=2)},
        )
        assert summary.scoped(False)[5].hits == 1
        assert summary.scoped(True)[5].hits == 2
        assert summary.all_scoped() == [(False, 5, summary.seasons[5]), (True, 5, summary.postseasons[5])]

    def test_dict_round_trip_keeps_season_numbers(self) -> None:
        summary = PlayerSummary(
            id="p1",
            tally_type=PitchingTally,
            name="Pitcher One",
            slug="pitcher-one",
            seasons={6: PitchingTally(wins=3), 5: PitchingTally(wins=1)},
        )
        data = summary.to_dict()
        assert list(data["seasons"]) == ["5", "6"]
        restored = PlayerSummary.from_dict(data, PitchingTally)
        assert restored.seasons[6].wins == 3
        assert restored.name == "Pitcher One"
        assert restored.tally_type is PitchingTally
