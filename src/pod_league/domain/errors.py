from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueError:
    message: str


@dataclass(frozen=True)
class ConfigError(LeagueError):
    key: str | None = None
