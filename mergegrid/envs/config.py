"""
Configuration of a game session.
"""

from dataclasses import dataclass, field

from mergegrid.core.grid import TILE_SPAWN_PROBS


@dataclass
class GameConfig:
    """
    Parameters of a game session.

    Attributes
    ----------
    size : int
        Number of cells on each side of the grid.
    start_tiles : int
        Number of tiles spawned when a game starts.
    spawn_probs : dict[int, float]
        Probability of each value for a spawned tile.
    swipe_sensitivity : float
        Minimal gesture length, in screen units, recognised as a swipe.
    seed : int | None
        Seed of the random generator, None for a non-reproducible game.
    """

    size: int = 4
    start_tiles: int = 2
    spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))
    swipe_sensitivity: float = 3.0
    seed: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be >= 2, got {self.size}')
        if not 0 < self.start_tiles <= self.size * self.size:
            raise ValueError(f'start_tiles must be in [1, {self.size * self.size}], got {self.start_tiles}')
        if any(value <= 0 or value & (value - 1) for value in self.spawn_probs):
            raise ValueError(f'Spawned values must be powers of two, got {list(self.spawn_probs)}')
        if abs(sum(self.spawn_probs.values()) - 1.0) > 1e-9:
            raise ValueError('Spawn probabilities must sum to 1')
        if self.swipe_sensitivity < 0:
            raise ValueError(f'swipe_sensitivity must be >= 0, got {self.swipe_sensitivity}')
