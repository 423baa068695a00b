from __future__ import annotations

from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from pod_league.domain.errors import ConfigError
from pod_league.domain.result import Err, Ok, Result, collect
from pod_league.domain.rules import LeagueRules

_DEFAULTS: dict[str, object] = {
    "database": {
        "path": "~/.config/pod_league/league.db",
    },
    "league": {
        "pod_size": 4,
        "rounds_per_week": 3,
        "min_weeks": 1,
        "max_weeks": 99,
        "min_random_per_week": 0,
        "max_random_per_week": 99,
        "default_total_weeks": 6,
        "default_random_per_week": 2,
    },
    "random": {
        "seed": "",
    },
}

_RULE_KEYS = (
    "pod_size",
    "rounds_per_week",
    "min_weeks",
    "max_weeks",
    "min_random_per_week",
    "max_random_per_week",
    "default_total_weeks",
    "default_random_per_week",
)


def create_config(
    yaml_path: str = "pod_league.yaml",
    env_prefix: str = "POD_LEAGUE",
    defaults: dict[str, object] | None = None,
    *,
    db_path: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if db_path is not None:
        layers.insert(0, config_from_dict({"database": {"path": db_path}}))
    return ConfigurationSet(*layers)


def _check_rules(rules: LeagueRules) -> Result[LeagueRules, ConfigError]:
    if rules.pod_size <= 0:
        return Err(ConfigError(message=f"pod_size must be > 0, got {rules.pod_size}", key="league.pod_size"))
    if rules.rounds_per_week <= 0:
        return Err(
            ConfigError(
                message=f"rounds_per_week must be > 0, got {rules.rounds_per_week}",
                key="league.rounds_per_week",
            )
        )
    if not 1 <= rules.min_weeks <= rules.max_weeks:
        return Err(
            ConfigError(message=f"invalid week range {rules.min_weeks}..{rules.max_weeks}", key="league.min_weeks")
        )
    if not 0 <= rules.min_random_per_week <= rules.max_random_per_week:
        return Err(
            ConfigError(
                message=f"invalid random achievements range {rules.min_random_per_week}..{rules.max_random_per_week}",
                key="league.min_random_per_week",
            )
        )
    return Ok(rules)


def _parse_int(key: str, raw: object) -> Result[int, ConfigError]:
    try:
        return Ok(int(str(raw)))
    except ValueError:
        return Err(ConfigError(message=f"{key} must be an integer, got {raw!r}", key=key))


def load_league_rules(cfg: ConfigurationSet | None = None) -> Result[LeagueRules, ConfigError]:
    if cfg is None:
        cfg = create_config()
    parsed = collect((key, _parse_int(f"league.{key}", cfg[f"league.{key}"])) for key in _RULE_KEYS)
    match parsed:
        case Err():
            return parsed
        case Ok(values):
            return _check_rules(LeagueRules(**values))


def database_path(cfg: ConfigurationSet) -> Path:
    return Path(str(cfg["database.path"])).expanduser()


def random_seed(cfg: ConfigurationSet) -> int | None:
    raw = str(cfg["random.seed"]).strip()
    if not raw:
        return None
    return int(raw)
