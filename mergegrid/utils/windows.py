# -*- coding: utf-8 -*-
"""
Display the game in a window.
"""
import numpy as np
from matplotlib import pyplot as plt


class WindowBoard:
    """
    Window to draw the 2048 board using Matplotlib.
    Inspired by @Farama-Foundation (Minigrid).
    """

    # ##: Colors
    COLORS = {
        0: "#CDC1B4",
        2: "#EEE4DA",
        4: "#ECE0C8",
        8: "#ECB280",
        16: "#EC8D53",
        32: "#F57C5F",
        64: "#E95937",
        128: "#F3D96B",
        256: "#F2D04A",
        512: "#E5BF2E",
        1024: "#E2B814",
        2048: "#EBC502",
        4096: "#00A2D8",
    }
    HIGH_COLOR = "#9ED682"

    def __init__(self, title: str, size: int):
        # ## ----> Create support.
        self.title = title
        self.fig, self.axe = plt.subplots()
        self.fig.subplots_adjust(left=0, bottom=0, right=1, top=0.92, wspace=0.1, hspace=0.1)
        self.axe.set_facecolor("#BBADA0")
        self.fig.canvas.manager.set_window_title(title)
        self.axe.set_axis_off()

        # ## ----> Add cell for board, row by row.
        self.textes = []
        self.axes = [self.fig.add_subplot(size, size, r * size + c) for r in range(0, size) for c in range(1, size + 1)]
        for _ax in self.axes:
            text = _ax.text(
                0.5,
                0.5,
                "",
                horizontalalignment="center",
                verticalalignment="center",
                fontsize="x-large",
                fontweight="demibold",
            )
            self.textes.append(text)
            _ = _ax.set_xticks([])
            _ = _ax.set_yticks([])

        # ## ----> Flag indicating that the window was closed.
        self.closed = False

        def close_handler(evt):
            self.closed = True

        self.fig.canvas.mpl_connect("close_event", close_handler)

    @classmethod
    def color(cls, value: int) -> str:
        """
        Background color of a tile.

        Parameters
        ----------
        value: int
            Value of the tile, 0 for an empty cell
        """
        return cls.COLORS.get(value, cls.HIGH_COLOR)

    def show_image(self, board: np.ndarray, score: int = 0, finished: bool = False):
        """
        Show the board or update the board being shown.

        Parameters
        ----------
        board: np.ndarray
            Board to show, indexed [y, x]

        score: int
            Score to display above the board

        finished: bool
            Whether the game is over
        """
        # ## ----> Update the cells.
        values = np.reshape(board, -1)
        for _ax, text, value in zip(self.axes, self.textes, values):
            text.set_text(str(int(value)) if value else "")
            _ax.set_facecolor(self.color(int(value)))

        status = " - Game over! (backspace to restart)" if finished else ""
        self.fig.suptitle(f"Score: {score}{status}")

        # ## ---> Request the window to be redrawn
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

        # ## ----> Let Matplotlib process UI events
        plt.pause(0.001)

    def register_key_handler(self, key_handler):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler: Any
            Key handler
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)

    def register_swipe_handler(self, swipe_handler):
        """
        Register a handler called with the start and end positions of a mouse or touch drag.

        Parameters
        ----------
        swipe_handler: Any
            Called with two (x, y) tuples in screen pixels, y growing downward
        """
        press = {}
        height = self.fig.canvas.get_width_height()[1]

        def on_press(event):
            press["start"] = (event.x, height - event.y)

        def on_release(event):
            start = press.pop("start", None)
            if start is not None:
                swipe_handler(start, (event.x, height - event.y))

        self.fig.canvas.mpl_connect("button_press_event", on_press)
        self.fig.canvas.mpl_connect("button_release_event", on_release)

    def show(self, block: bool = True):
        """
        Show the window, and start an event loop.

        Parameters
        ----------
        block: bool
            Activate or not the interactive mode
        """
        # ## ----> If not blocking, trigger interactive mode.
        if not block:
            plt.ion()

        # ## ----> Show the plot.
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close(self.fig)
        self.closed = True
