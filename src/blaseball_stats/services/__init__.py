"""Batch jobs that read the persisted data, compute derived views and write them back."""

from blaseball_stats.services.jobs import (
    CountReport,
    LeadersJobReport,
    StandingsJobReport,
    StatJobReport,
    reprocess_floor,
    run_leaders_job,
    run_players_job,
    run_standings_job,
    run_stat_job,
    run_team_stats_job,
)

__all__ = [
    "CountReport",
    "LeadersJobReport",
    "StandingsJobReport",
    "StatJobReport",
    "reprocess_floor",
    "run_leaders_job",
    "run_players_job",
    "run_standings_job",
    "run_stat_job",
    "run_team_stats_job",
]
