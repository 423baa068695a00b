from dataclasses import dataclass


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    points: int
    always_on: bool = False


@dataclass(frozen=True)
class AchievementCheck:
    """An achievement earned in a finalized round.

    ``points`` is copied from the achievement when the round is finalized so
    later edits to the catalog leave history untouched.
    """

    player_id: str
    achievement_id: str
    points: int
