"""Phrase tables that map game update text onto tally counters.

Rules are independent of one another: a single update such as
``"hits a Double!"`` fires both the hit and the double rule. Each rule
names the counters it increments on the player it targets.
"""

import re
from dataclasses import dataclass

from blaseball_stats.domain.stat_event import EventKind


@dataclass(frozen=True)
class EventRule:
    kind: EventKind
    pattern: re.Pattern[str]
    stats: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def phrase(pattern: str) -> re.Pattern[str]:
    """Case-insensitive substring match."""
    return re.compile(pattern, re.IGNORECASE)


def words(*pieces: str) -> re.Pattern[str]:
    """Case-insensitive match of any piece as a whole word or phrase."""
    return re.compile(rf"\b(?:{'|'.join(pieces)})\b", re.IGNORECASE)


# Batting: credited to the batter of the previous tick.

_AT_BAT = r"hits a|hit into|fielder's choice|strikes out|struck out|ground out|flyout"
_HIT = r"hits a"

BATTING_RULES: tuple[EventRule, ...] = (
    EventRule(
        EventKind.PLATE_APPEARANCE,
        phrase(rf"{_AT_BAT}|sacrifice|draws a walk"),
        ("plate_appearances",),
    ),
    EventRule(EventKind.AT_BAT, phrase(_AT_BAT), ("at_bats",)),
    EventRule(EventKind.HIT, phrase(_HIT), ("hits",)),
    EventRule(EventKind.DOUBLE, phrase(r"hits a double"), ("doubles_hit",)),
    EventRule(EventKind.TRIPLE, phrase(r"hits a triple"), ("triples_hit",)),
    EventRule(EventKind.HOME_RUN, phrase(r"home run|grand slam"), ("home_runs_hit", "runs_scored")),
    EventRule(EventKind.WALK, phrase(r"walk"), ("bases_on_balls",)),
    EventRule(EventKind.STRIKEOUT, phrase(r"strikes out|struck out"), ("strikeouts",)),
    EventRule(EventKind.DOUBLE_PLAY, phrase(r"hit into a double play"), ("ground_into_double_plays",)),
    EventRule(EventKind.SACRIFICE_BUNT, phrase(r"scores on the sacrifice"), ("sacrifice_bunts",)),
    EventRule(EventKind.SACRIFICE_FLY, phrase(r"sacrifice fly"), ("sacrifice_flies",)),
)

# Only fire when a runner stood on second or third before the play.
RISP_RULES: tuple[EventRule, ...] = (
    EventRule(EventKind.RISP_AT_BAT, phrase(_AT_BAT), ("at_bats_with_runners_in_scoring_position",)),
    EventRule(EventKind.RISP_HIT, phrase(_HIT), ("hits_with_runners_in_scoring_position",)),
)

RUNS_BATTED_IN = phrase(r"home run|scores|grand slam")
HOME_RUN = phrase(r"home run|grand slam")
RUNNERS_SCORED_COUNT = phrase(r"(\d) scores")
RUNNER_SCORES = phrase(r"\D scores")
STEALS = phrase(r"steals ([\w].*?)!")
CAUGHT_STEALING = phrase(r"([\w].*?) gets caught stealing")
HITTER_INCINERATED = phrase(r"Rogue Umpire incinerated [\w\s]+ hitter ([\w\s]+)!")

# Pitching: matched against the update with the literal name "Scores
# Baserunner" removed, so that player does not read as a scoring play.

SCORES_BASERUNNER = re.compile(r"\bScores Baserunner\b")

PITCHING_RULES: tuple[EventRule, ...] = (
    EventRule(
        EventKind.OUT,
        words("hit a", "hit into", "strikes out", "struck out", "caught stealing", "fielder's choice", "sacrifice"),
        ("outs_recorded",),
    ),
    EventRule(
        EventKind.PITCH,
        words(
            "hit a",
            "hit into",
            "hits",
            "foul ball",
            "draws a",
            "game over",
            "strikes out",
            "struck out",
            "reaches",
            "steals",
            "caught stealing",
            "fielder's choice",
            "sacrifice",
        ),
        ("pitch_count",),
    ),
    EventRule(EventKind.FLYOUT, words("flyout"), ("flyouts",)),
    EventRule(EventKind.GROUNDOUT, words("ground out"), ("groundouts",)),
    EventRule(EventKind.HIT_ALLOWED, words("hits an?"), ("hits_allowed",)),
    EventRule(EventKind.WALK, words("draws a walk", "with a pitch"), ("bases_on_balls",)),
    EventRule(EventKind.HIT_BY_PITCH, words("with a pitch"), ("hit_by_pitches",)),
    EventRule(EventKind.STRIKEOUT, words("strikes out", "struck out"), ("strikeouts",)),
    EventRule(EventKind.HOME_RUN, words("home run", "grand slam"), ("home_runs",)),
)

GAME_OVER = words("Game Over")
BATTING_FOR = words("batting for")
PITCHER_INCINERATED = re.compile(r"\bRogue Umpire incinerated [\w\s]+ pitcher ([\w\s]+)!", re.IGNORECASE)
