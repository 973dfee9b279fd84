"""Mask Painter - desktop entry point."""

import argparse
import logging
import sys
import os
import tkinter as tk
from tkinter import ttk

# Ensure the app directory is on the import path
app_dir = os.path.dirname(os.path.abspath(__file__))
if app_dir not in sys.path:
    sys.path.insert(0, app_dir)

from gui.main_window import MainWindow
from models.editor_config import load_config

# Colors used throughout the app
COLORS = {
    "bg": "#f0f0f0",
    "toolbar_bg": "#e2e2e2",
    "accent": "#5E8C2A",
    "accent_hover": "#6FA032",
    "accent_fg": "#ffffff",
    "status_bg": "#e0e0e0",
    "panel_bg": "#f5f5f5",
    "border": "#c0c0c0",
    "text": "#1a1a1a",
    "text_secondary": "#555555",
}


def configure_styles():
    """Set up the ttk theme and the custom styles the windows refer to."""
    style = ttk.Style()
    style.theme_use("clam")

    style.configure(".", font=("Segoe UI", 9), background=COLORS["bg"],
                    foreground=COLORS["text"])

    style.configure("TFrame", background=COLORS["bg"])
    style.configure("Toolbar.TFrame", background=COLORS["toolbar_bg"])
    style.configure("Panel.TFrame", background=COLORS["panel_bg"])
    style.configure("Status.TFrame", background=COLORS["status_bg"])

    style.configure("Panel.TLabel", background=COLORS["panel_bg"])
    style.configure("Status.TLabel", background=COLORS["status_bg"],
                    foreground=COLORS["text_secondary"], font=("Segoe UI", 8))

    style.configure("TButton", padding=(8, 4))
    style.configure("Accent.TButton", background=COLORS["accent"],
                    foreground=COLORS["accent_fg"], padding=(10, 5),
                    font=("Segoe UI", 9, "bold"))
    style.map("Accent.TButton",
              background=[("active", COLORS["accent_hover"]),
                          ("!active", COLORS["accent"])])
    style.configure("Toolbar.TButton", padding=(6, 3), font=("Segoe UI", 8),
                    background=COLORS["toolbar_bg"])

    style.configure("TLabelframe", background=COLORS["panel_bg"])
    style.configure("TLabelframe.Label", background=COLORS["panel_bg"],
                    foreground=COLORS["accent"], font=("Segoe UI", 9, "bold"))
    style.configure("TRadiobutton", background=COLORS["panel_bg"])
    style.configure("Horizontal.TScale", background=COLORS["panel_bg"])
    style.configure("TSeparator", background=COLORS["border"])
    style.configure("TProgressbar", troughcolor=COLORS["bg"],
                    background=COLORS["accent"])


def main(argv=None):
    parser = argparse.ArgumentParser(description="Paint an inpainting mask over an image.")
    parser.add_argument("--config", help="path to a JSON settings file")
    parser.add_argument("--save-config", metavar="PATH",
                        help="write the effective settings to PATH as JSON and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
    )
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    config = load_config(args.config)
    if args.save_config:
        config.save_json(args.save_config)
        logging.getLogger(__name__).info("Settings written to %s", args.save_config)
        return

    root = tk.Tk()
    root.configure(bg=COLORS["bg"])
    configure_styles()
    MainWindow(root, config)
    root.mainloop()


if __name__ == "__main__":
    main()
