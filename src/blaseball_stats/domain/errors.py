from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineError:
    message: str


@dataclass(frozen=True)
class IngestError(PipelineError):
    source_detail: str
    ticks_read: int = 0


@dataclass(frozen=True)
class FetchError(PipelineError):
    url: str = ""


@dataclass(frozen=True)
class PersistenceError(PipelineError):
    path: str = ""


@dataclass(frozen=True)
class ConfigError(PipelineError):
    key: str = ""
