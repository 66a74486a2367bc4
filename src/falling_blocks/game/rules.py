from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    points_per_level: int = 500
    base_interval_ms: int = 1000
    interval_step_ms: int = 50
    min_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points * level

    def level_for_score(self, score: int) -> int:
        return score // self.points_per_level + 1

    def drop_interval_ms(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - level * self.interval_step_ms)
