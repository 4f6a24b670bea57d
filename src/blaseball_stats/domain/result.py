"""Ok/Err result values returned by pipeline jobs.

Jobs report failures as values instead of raising so the CLI can decide how
to present them:

    match run_standings_job(...):
        case Ok(report):
            ...
        case Err(error):
            ...
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
