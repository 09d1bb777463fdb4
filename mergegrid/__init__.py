# -*- coding: utf-8 -*-
"""
Sliding-tile merge puzzle engine (2048) on a square grid.
"""

from .core import Direction, Grid
from .envs import GameConfig, GameSession

__all__ = ["Direction", "Grid", "GameConfig", "GameSession"]
