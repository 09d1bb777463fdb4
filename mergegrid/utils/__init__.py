# -*- coding: utf-8 -*-
"""
This module provides the input and display adapters of the game: swipe detection and a `WindowBoard`
class drawing the board with Matplotlib.
"""

from .gestures import detect_swipe

__all__ = ["detect_swipe"]
