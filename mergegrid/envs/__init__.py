# -*- coding: utf-8 -*-
"""
Game session of the 2048 game.

This module provides the `GameSession` class, which runs the turns of a game on a grid, and its `GameConfig`.
"""

from .config import GameConfig
from .game import GameSession

__all__ = ["GameConfig", "GameSession"]
