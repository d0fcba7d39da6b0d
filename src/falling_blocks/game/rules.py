from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    messages: tuple[str, str, str, str, str] = (
        "You can do it!",
        "Good job!",
        "Wow!",
        "That's amazing!",
        "TETRIS!!!!",
    )

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # A single piece spans at most 4 rows.
        return self.line_clear_scores[min(lines, 4) - 1]

    def message_for_lines(self, lines: int) -> str:
        return self.messages[max(0, min(lines, 4))]
