from blaseball_stats.domain.standings import LeagueStructure, SeasonStructure, Subleague
from blaseball_stats.services.league_structure import ONE_DAY_MS, is_fresh, resolve_league_structure
from tests.fakes.sources import FakeLeagueSource


class TestIsFresh:
    def test_recent_cache_for_current_season(self, league_structure: LeagueStructure) -> None:
        assert is_fresh(league_structure, 6, league_structure.last_updated_at + 1)

    def test_stale_after_a_day(self, league_structure: LeagueStructure) -> None:
        assert not is_fresh(league_structure, 6, league_structure.last_updated_at + ONE_DAY_MS + 1)

    def test_new_season_invalidates(self, league_structure: LeagueStructure) -> None:
        assert not is_fresh(league_structure, 7, league_structure.last_updated_at)


class TestResolveLeagueStructure:
    def test_reuses_fresh_cache(self, league_structure: LeagueStructure, season_structure: SeasonStructure) -> None:
        source = FakeLeagueSource(6, season_structure)
        structure, refreshed = resolve_league_structure(source, league_structure, clock=lambda: 2_000)
        assert structure is league_structure
        assert not refreshed
        assert source.fetch_count == 0

    def test_fetches_without_cache(self, season_structure: SeasonStructure) -> None:
        source = FakeLeagueSource(6, season_structure)
        structure, refreshed = resolve_league_structure(source, None, clock=lambda: 5_000)
        assert refreshed
        assert structure == LeagueStructure(seasons={6: season_structure}, last_updated_at=5_000)

    def test_new_season_keeps_earlier_seasons(self, league_structure: LeagueStructure) -> None:
        season_7 = SeasonStructure(subleagues=(Subleague(id="SL9"),))
        source = FakeLeagueSource(7, season_7)
        structure, refreshed = resolve_league_structure(source, league_structure, clock=lambda: 2_000)
        assert refreshed
        assert list(structure.seasons) == [6, 7]
        assert structure.seasons[6] == league_structure.seasons[6]
        assert structure.seasons[7] is season_7
        assert structure.last_updated_at == 2_000
