from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Scope:
    """Key under which a tally is stored: regular season or postseason of a season."""

    season: int
    postseason: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """One tick of a single game's state.

    ``fingerprint`` is a digest of the raw record the snapshot was built from;
    two snapshots with the same fingerprint describe byte-identical state.
    """

    id: str
    fingerprint: str
    season: int = 0
    day: int = 0
    is_postseason: bool = False
    inning: int = 0
    top_of_inning: bool = True
    home_team: str | None = None
    away_team: str | None = None
    home_team_name: str | None = None
    away_team_name: str | None = None
    home_team_nickname: str | None = None
    away_team_nickname: str | None = None
    home_pitcher: str | None = None
    away_pitcher: str | None = None
    home_pitcher_name: str | None = None
    away_pitcher_name: str | None = None
    home_batter: str | None = None
    away_batter: str | None = None
    home_batter_name: str | None = None
    away_batter_name: str | None = None
    home_score: float = 0
    away_score: float = 0
    half_inning_score: float | None = None
    last_update: str = ""
    bases_occupied: tuple[int, ...] = ()
    base_runners: tuple[str | None, ...] = ()
    game_start: bool = False
    game_complete: bool = False
    weather: int | None = None
    outcomes: tuple[str, ...] = ()
    shame: bool = False

    @property
    def scope(self) -> Scope:
        return Scope(season=self.season, postseason=self.is_postseason)

    # The away team bats in the top half of an inning.
    @property
    def batter(self) -> str | None:
        return self.away_batter if self.top_of_inning else self.home_batter

    @property
    def batter_name(self) -> str | None:
        return self.away_batter_name if self.top_of_inning else self.home_batter_name

    @property
    def batting_team(self) -> str | None:
        return self.away_team if self.top_of_inning else self.home_team

    @property
    def batting_team_name(self) -> str | None:
        return self.away_team_name if self.top_of_inning else self.home_team_name

    @property
    def pitcher(self) -> str | None:
        return self.home_pitcher if self.top_of_inning else self.away_pitcher

    @property
    def pitcher_name(self) -> str | None:
        return self.home_pitcher_name if self.top_of_inning else self.away_pitcher_name

    @property
    def pitching_team(self) -> str | None:
        return self.home_team if self.top_of_inning else self.away_team

    @property
    def pitching_team_name(self) -> str | None:
        return self.home_team_name if self.top_of_inning else self.away_team_name

    @property
    def batting_score(self) -> float:
        return self.away_score if self.top_of_inning else self.home_score
