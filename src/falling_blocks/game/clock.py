from __future__ import annotations


class ManualClock:
    """Clock callable that only moves when told to.

    Drop-in for `time.monotonic` where gravity must be reproducible.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
