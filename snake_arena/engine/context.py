"""Explicit per-run dependencies threaded through every engine system."""

from __future__ import annotations

from dataclasses import dataclass, field

from snake_arena.config.types import GameSettings
from snake_arena.domain.random_port import RandomPort, SeededRandom, SystemRandomPort


@dataclass(frozen=True)
class EngineContext:
    """Settings plus randomness; the only path by which systems read either."""

    settings: GameSettings = field(default_factory=GameSettings)
    rng: RandomPort = field(default_factory=SystemRandomPort)

    @classmethod
    def seeded(cls, seed: int, settings: GameSettings | None = None) -> EngineContext:
        """Context with a ``SeededRandom`` LCG for reproducible runs."""
        return cls(settings=settings or GameSettings(), rng=SeededRandom(seed))

    def with_settings(self, settings: GameSettings) -> EngineContext:
        return EngineContext(settings=settings, rng=self.rng)
