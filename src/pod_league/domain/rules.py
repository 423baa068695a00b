from dataclasses import dataclass


@dataclass(frozen=True)
class LeagueRules:
    pod_size: int = 4
    rounds_per_week: int = 3
    min_weeks: int = 1
    max_weeks: int = 99
    min_random_per_week: int = 0
    max_random_per_week: int = 99
    default_total_weeks: int = 6
    default_random_per_week: int = 2

    def clamp_weeks(self, weeks: int) -> int:
        return min(max(weeks, self.min_weeks), self.max_weeks)

    def clamp_random_per_week(self, count: int) -> int:
        return min(max(count, self.min_random_per_week), self.max_random_per_week)
