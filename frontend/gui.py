#!/usr/bin/env python3
"""
Calculator GUI

Single-screen calculator with a history window (Tkinter).

- Dark-themed keypad: digits, decimal separator, + - x /, =, C.
- Operators are applied strictly left to right by the backend engine.
- Tap flash on every button, label shake on errors.
- Typing 3,14159 shows a hidden alert that fades in and slides up.
- Holding the mouse anywhere in the window grows an orange circle until release.
- History window (frontend.history_view) lists past calculations, newest first.

All arithmetic and history bookkeeping lives in backend.controller; this module
only draws widgets and forwards events.
"""

import logging
import sys
import tkinter as tk
from pathlib import Path
from typing import Optional

from backend import config
from backend.controller import CalculatorController
from backend.engine import CalculationError, Operation
from backend.history import Calculation, HistoryRecorder, HistoryStorage
from frontend.history_view import HistoryWindow

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 360
WINDOW_HEIGHT = 540

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # digit tile background
OP_BG = "#ff9f0a"       # operator tile background
FLASH_BG = "#5a5d61"    # tile colour while "pressed"
FG = "#E6EEF3"          # foreground text (light)
ACCENT = "#cfeeff"      # accent color for titles, etc.
CIRCLE_COLOR = "#ff9500"

TITLE_FONT = ("Segoe UI", 13, "bold")
DISPLAY_FONT = ("Consolas", 36)
KEY_FONT = ("Segoe UI", 16)


def circle_radius(frame: int, frames: int, start: float, scale: float) -> float:
    """Ease-in radius of the long-press circle: start at frame 0, start * scale at the last frame."""
    t = min(max(frame / frames, 0.0), 1.0)
    return start * (1 + (scale - 1) * t * t)


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, controller: Optional[CalculatorController] = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(320, 480)
        self.configure(bg=BG)
        self._load_icon()

        if controller is None:
            controller = CalculatorController(history=HistoryRecorder(HistoryStorage()))
        self.controller = controller
        self.controller.error_listeners.append(self._on_error)
        self.controller.result_listeners.append(self._on_result)
        self.controller.easter_egg_listeners.append(self._animate_alert)

        # Internal state
        self.history_window: Optional[HistoryWindow] = None
        self._long_press_job: Optional[str] = None   # pending "after" id for the long press
        self._circle_job: Optional[str] = None       # running circle animation step
        self._circle_id: Optional[int] = None
        self.circle_canvas: Optional[tk.Canvas] = None
        self._shaking = False
        self.alert: Optional[tk.Toplevel] = None

        # Build UI sections
        self._build_header()        # top bar with title/history
        self._build_display()       # right-aligned entry label
        self._build_keypad()        # digit and operator tiles

        # Keyboard input mirrors the keypad
        self.bind("<Key>", self._on_key)
        self.bind("<Return>", lambda e: self._press("="))
        self.bind("<KP_Enter>", lambda e: self._press("="))
        self.bind("<Escape>", lambda e: self._press("C"))

        # Long press anywhere in the window, buttons included
        self.bind_all("<ButtonPress-1>", self._on_long_press_start, add="+")
        self.bind_all("<ButtonRelease-1>", self._on_long_press_end, add="+")

    def _load_icon(self):
        """Use assets/app_icon.png when the project ships one."""
        if getattr(sys, "frozen", False):
            # Support PyInstaller one-file bundle
            base_dir = Path(sys._MEIPASS)
        else:
            base_dir = Path(__file__).resolve().parent.parent

        icon_path = base_dir / "assets" / "app_icon.png"
        if not icon_path.exists():
            logger.debug("No window icon at %s", icon_path)
            return
        # Keep a reference to the PhotoImage so it isn't garbage-collected
        self.icon = tk.PhotoImage(file=str(icon_path))
        self.iconphoto(True, self.icon)

    # -------------------------
    # Header
    # -------------------------
    def _build_header(self):
        """Top header with title and history button."""
        header = tk.Frame(self, bg=PANEL_BG, height=48)
        header.pack(fill="x", side="top")

        tk.Label(header, text="Calculator", bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=12, pady=6)

        # Spacer to push the History button to the right
        tk.Frame(header, bg=PANEL_BG).pack(side="left", expand=True)

        self.history_btn = tk.Button(header, text="History", bg=PANEL_BG, fg=FG, relief="flat", command=self.toggle_history)
        self.history_btn.pack(side="right", padx=8, pady=6)

    # -------------------------
    # Display and keypad
    # -------------------------
    def _build_display(self):
        # Background panel holding the display and the keypad
        self.backdrop = tk.Frame(self, bg=PANEL_BG)
        self.backdrop.pack(fill="both", expand=True)

        self.display_var = tk.StringVar(value=self.controller.display)
        self.display_label = tk.Label(self.backdrop, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                                      anchor="e", font=DISPLAY_FONT)
        self.display_label.place(relx=0.5, y=20, relwidth=0.92, anchor="n")

    def _build_keypad(self):
        """Keypad grid of equal-sized tiles."""
        sep = self.controller.separator
        tiles = [
            ["7", "8", "9", "/"],
            ["4", "5", "6", "x"],
            ["1", "2", "3", "-"],
            ["0", sep, "=", "+"],
            ["C", "", "", ""],
        ]
        operators = {op.value for op in Operation} | {"="}

        self.keypad = tk.Frame(self.backdrop, bg=PANEL_BG)
        self.keypad.place(relx=0.5, rely=1.0, relwidth=0.96, relheight=0.72, anchor="s", y=-8)
        self.buttons = {}
        for r, row in enumerate(tiles):
            for c, label in enumerate(row):
                if not label:
                    spacer = tk.Frame(self.keypad, bg=PANEL_BG)
                    spacer.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                else:
                    bg = OP_BG if label in operators else BTN_BG
                    btn = tk.Button(self.keypad, text=label, bg=bg, fg=FG, relief="flat", font=KEY_FONT,
                                    activebackground=FLASH_BG, command=lambda l=label: self._press(l))
                    btn.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                    self.buttons[label] = btn
                self.keypad.grid_columnconfigure(c, weight=1)
            self.keypad.grid_rowconfigure(r, weight=1)

    # -------------------------
    # Input
    # -------------------------
    def _press(self, label: str):
        """Forward a key to the controller and refresh the display."""
        try:
            self.controller.press(label)
        except CalculationError as e:
            logger.debug("Ignored key %r: %s", label, e)
            return
        self.display_var.set(self.controller.display)
        btn = self.buttons.get(label)
        if btn is not None:
            self._animate_tap(btn)

    def _on_key(self, event):
        ch = event.char
        if not ch:
            return
        if ch.isdigit() or ch in ("+", "-", "*", "x", "/", ",", ".", "="):
            self._press(ch)
        elif ch in ("c", "C"):
            self._press("C")

    # -------------------------
    # Controller callbacks
    # -------------------------
    def _on_error(self, error: CalculationError):
        self.display_var.set(self.controller.display)
        self._shake_label()

    def _on_result(self, calculation: Calculation):
        if self.history_window and self.history_window.exists():
            self.history_window.refresh()

    # -------------------------
    # Animations
    # -------------------------
    def _animate_tap(self, btn: tk.Button):
        """Flash the tile briefly, then restore its colour."""
        original = btn.cget("bg")
        if original == FLASH_BG:
            return
        btn.configure(bg=FLASH_BG)
        self.after(config.ANIMATION_CONFIG["tap_flash_ms"], lambda: btn.configure(bg=original))

    def _shake_label(self):
        """Move the display left and right a few times."""
        if self._shaking:
            return
        self._shaking = True
        cfg = config.ANIMATION_CONFIG
        offsets = []
        for _ in range(cfg["shake_repeats"]):
            offsets += [-cfg["shake_offset"], cfg["shake_offset"]]
        offsets.append(0)

        def step(i=0):
            if i >= len(offsets):
                self._shaking = False
                return
            self.display_label.place_configure(x=offsets[i])
            self.after(cfg["shake_step_ms"], lambda: step(i + 1))

        step()

    def _animate_alert(self):
        """Fade the hidden alert in over the keypad, then slide it up toward the display."""
        cfg = config.ANIMATION_CONFIG
        if self.alert is not None and self.alert.winfo_exists():
            self.alert.destroy()

        win = tk.Toplevel(self)
        win.overrideredirect(True)  # no titlebar
        win.transient(self)
        win.configure(bg=ACCENT)
        self.alert = win
        tk.Label(win, text=config.EASTER_EGG_TEXT, bg=ACCENT, fg=BG, font=TITLE_FONT).pack(
            fill="both", expand=True, padx=16, pady=30)

        width = max(self.winfo_width() - 40, 200)
        height = 100
        x = self.winfo_rootx() + (self.winfo_width() - width) // 2
        start_y = self.winfo_rooty() + (self.winfo_height() - height) // 2
        end_y = self.display_label.winfo_rooty() + self.display_label.winfo_height() - height
        win.geometry(f"{width}x{height}+{x}+{start_y}")
        win.attributes("-alpha", 0.0)
        win.attributes("-topmost", True)

        frames = 25
        half_ms = cfg["alert_duration_ms"] // 2
        step_ms = max(half_ms // frames, 1)

        def fade(i=1):
            if not win.winfo_exists():
                return
            win.attributes("-alpha", i / frames)
            if i < frames:
                self.after(step_ms, lambda: fade(i + 1))
            else:
                slide(1)

        def slide(i):
            if not win.winfo_exists():
                return
            y = start_y + (end_y - start_y) * i // frames
            win.geometry(f"+{x}+{y}")
            if i < frames:
                self.after(step_ms, lambda: slide(i + 1))

        self.after(cfg["alert_delay_ms"], fade)
        win.bind("<Button-1>", lambda e: win.destroy())

    def _on_long_press_start(self, event):
        self._on_long_press_end(event)
        # history window and alert clicks don't count
        if not isinstance(event.widget, tk.Misc) or event.widget.winfo_toplevel() is not self:
            return
        self._long_press_job = self.after(config.ANIMATION_CONFIG["long_press_ms"], self.start_circle_animation)

    def _on_long_press_end(self, event):
        if self._long_press_job:
            self.after_cancel(self._long_press_job)
            self._long_press_job = None
        self.stop_circle_animation()

    def start_circle_animation(self):
        """Grow an orange circle from the centre of the window (ease-in), above every widget."""
        self._long_press_job = None
        self.stop_circle_animation()
        cfg = config.ANIMATION_CONFIG
        cx = self.winfo_width() / 2
        cy = self.winfo_height() / 2
        r0 = cfg["circle_start"] / 2

        # A sibling of the backdrop, so lifting it stacks it over the display and keypad
        canvas = tk.Canvas(self, bg=PANEL_BG, highlightthickness=0, bd=0)
        self.circle_canvas = canvas
        self._circle_id = canvas.create_oval(0, 0, 2 * r0, 2 * r0, fill=CIRCLE_COLOR, outline="")

        frames = 60
        step_ms = max(cfg["circle_duration_ms"] // frames, 1)

        def grow(i=0):
            if self._circle_id is None:
                return
            r = circle_radius(i, frames, r0, cfg["circle_scale"])
            canvas.place(x=cx - r, y=cy - r, width=2 * r, height=2 * r)
            canvas.coords(self._circle_id, 0, 0, 2 * r, 2 * r)
            canvas.lift()
            if i < frames:
                self._circle_job = self.after(step_ms, lambda: grow(i + 1))
            else:
                self._circle_job = None

        grow()

    def stop_circle_animation(self):
        if self._circle_job:
            self.after_cancel(self._circle_job)
            self._circle_job = None
        if self.circle_canvas is not None:
            self.circle_canvas.destroy()
            self.circle_canvas = None
        self._circle_id = None

    # -------------------------
    # History window
    # -------------------------
    def toggle_history(self):
        """Open or close the history window."""
        if self.history_window and self.history_window.exists():
            self.history_window.close()
            self.history_window = None
            return
        self.history_window = HistoryWindow(self, self.controller.history, self.controller.formatter)


# -------------------------
# Run the application
# -------------------------
def main():
    # Create and run the GUI
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
