"""
History window: past calculations grouped under their date, newest first,
with a small chart of the results in the order they were computed.
"""
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

import numpy as np
import matplotlib
matplotlib.use("TkAgg")  # use TkAgg backend for embedding in Tkinter windows
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from backend import config
from backend.formatting import NumberFormatter
from backend.history import HistoryRecorder

BG = "#e5e5ea"          # light grey list background
PANEL_BG = "#17181A"
FG = "#E6EEF3"
LINE_COLOR = "#ff9f0a"
AXES_BG = "#131416"
SPINE_COLOR = "#44484C"


class HistoryWindow:
    def __init__(self, master: tk.Misc, history: HistoryRecorder,
                 formatter: Optional[NumberFormatter] = None):
        self.history = history
        self.formatter = formatter or NumberFormatter()

        win = tk.Toplevel(master)
        win.title("Past calculations")
        win.geometry(f"{max(master.winfo_width(), 360)}x520")
        win.transient(master)
        win.protocol("WM_DELETE_WINDOW", self.close)
        self.window = win

        # Table: each calculation is a section headed by its date
        frm = tk.Frame(win, bg=BG)
        frm.pack(fill="both", expand=True)
        style = ttk.Style(win)
        style.configure("History.Treeview", rowheight=30)
        self.tree = ttk.Treeview(frm, columns=("result",), style="History.Treeview")
        self.tree.heading("#0", text="Expression")
        self.tree.heading("result", text="Result")
        self.tree.column("result", width=100, anchor="e")
        self.tree.pack(side="left", fill="both", expand=True, padx=6, pady=6)

        scrollbar = tk.Scrollbar(frm, command=self.tree.yview)
        self.tree.config(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")

        # Results chart
        chart = tk.Frame(win, bg=PANEL_BG)
        chart.pack(fill="x")
        self.fig = Figure(figsize=(4, 1.8), dpi=100, facecolor=PANEL_BG)
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=chart)
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

        controls = tk.Frame(win, bg=PANEL_BG)
        controls.pack(fill="x")
        tk.Button(controls, text="Clear history", bg=PANEL_BG, fg=FG, relief="flat",
                  command=self._clear).pack(side="right", padx=8, pady=6)

        self.refresh()

    def refresh(self):
        """Rebuild the table and chart from the recorder."""
        self.tree.delete(*self.tree.get_children())
        limit = config.DISPLAY_CONFIG["history_limit"]
        for row in self.history.rows(self.formatter, limit=limit):
            section = self.tree.insert("", "end", text=row.date_label, open=True)
            self.tree.insert(section, "end", text=row.expression_text, values=(row.result_text,))
        self._draw_chart()

    def _draw_chart(self):
        self.ax.clear()
        self.ax.set_facecolor(AXES_BG)
        for spine in self.ax.spines.values():
            spine.set_color(SPINE_COLOR)
        self.ax.tick_params(colors=FG, labelsize="small")

        results = np.array([c.result for c in self.history.chronological()], dtype=float)
        if results.size:
            xs = np.arange(1, results.size + 1)
            finite = np.isfinite(results)
            self.ax.plot(xs[finite], results[finite], marker="o", markersize=3, color=LINE_COLOR)
            self.ax.set_xlim(0.5, results.size + 0.5)
        self.fig.tight_layout()
        self.canvas.draw()

    def _clear(self):
        if not len(self.history):
            return
        if messagebox.askyesno("History", "Delete all past calculations?", parent=self.window):
            self.history.clear()
            self.refresh()

    def exists(self) -> bool:
        return self.window is not None and bool(self.window.winfo_exists())

    def close(self):
        """Close the history window if open."""
        if self.window is not None:
            self.window.destroy()
            self.window = None
