"""Progress indicator shown while a Droplet is being created"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpinnerFrames:
    frames: tuple[str, ...]
    interval: float


SPINNERS: dict[str, SpinnerFrames] = {
    "points": SpinnerFrames(("∙∙∙", "●∙∙", "∙●∙", "∙∙●"), 1 / 7),
    "line": SpinnerFrames(("|", "/", "-", "\\"), 1 / 10),
    "dot": SpinnerFrames(("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ "), 1 / 10),
}


class Spinner:
    """Cycles through a fixed set of frames, one per tick"""

    def __init__(self, name: str = "points") -> None:
        if name not in SPINNERS:
            raise ValueError(f"Unknown spinner {name!r}, expected one of: {', '.join(SPINNERS)}")
        self.name: str = name
        self.style: SpinnerFrames = SPINNERS[name]
        self.position: int = 0

    @property
    def interval(self) -> float:
        return self.style.interval

    def tick(self) -> str:
        self.position = (self.position + 1) % len(self.style.frames)
        return self.frame

    @property
    def frame(self) -> str:
        return self.style.frames[self.position]

    def reset(self) -> None:
        self.position = 0
