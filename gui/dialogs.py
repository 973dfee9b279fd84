"""Prompt dialog and generation progress dialog."""

import random
import tkinter as tk
from tkinter import ttk, messagebox
import threading
from typing import Callable, Optional

from PIL import Image

from models.errors import GenerationError


class PromptDialog(tk.Toplevel):
    """Modal dialog asking for the generation prompt and seed."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)
        self.title("Generate")
        self.resizable(False, False)
        self.transient(parent)
        self.grab_set()

        self.prompt: Optional[str] = None
        self.seed: Optional[int] = None

        self.geometry("380x150")
        self.update_idletasks()
        px = parent.winfo_rootx() + (parent.winfo_width() - 380) // 2
        py = parent.winfo_rooty() + (parent.winfo_height() - 150) // 2
        self.geometry(f"+{px}+{py}")

        self._build_ui()

    def _build_ui(self):
        self.configure(bg="#f0f0f0")
        frame = ttk.Frame(self)
        frame.pack(fill=tk.BOTH, expand=True, padx=16, pady=12)
        frame.columnconfigure(1, weight=1)

        ttk.Label(frame, text="Prompt:").grid(row=0, column=0, sticky=tk.W, pady=4)
        self._prompt_var = tk.StringVar()
        entry = ttk.Entry(frame, textvariable=self._prompt_var)
        entry.grid(row=0, column=1, sticky=tk.EW, pady=4)
        entry.focus_set()

        ttk.Label(frame, text="Seed:").grid(row=1, column=0, sticky=tk.W, pady=4)
        self._seed_var = tk.StringVar(value=str(random.randint(0, 2**31 - 1)))
        ttk.Entry(frame, textvariable=self._seed_var, width=14).grid(
            row=1, column=1, sticky=tk.W, pady=4
        )

        btns = ttk.Frame(frame)
        btns.grid(row=2, column=0, columnspan=2, sticky=tk.E, pady=(8, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side=tk.RIGHT, padx=2)
        ttk.Button(btns, text="Generate", style="Accent.TButton",
                   command=self._accept).pack(side=tk.RIGHT, padx=2)

        self.bind("<Return>", lambda e: self._accept())
        self.bind("<Escape>", lambda e: self.destroy())

    def _accept(self):
        try:
            seed = int(self._seed_var.get())
        except ValueError:
            messagebox.showwarning("Invalid Seed", "Seed must be a whole number.", parent=self)
            return
        self.prompt = self._prompt_var.get().strip()
        self.seed = seed
        self.grab_release()
        self.destroy()


class GenerationProgressDialog(tk.Toplevel):
    """Modal dialog that runs a generation in the background and shows its progress."""

    def __init__(self, parent, generate_func: Callable, **kwargs):
        super().__init__(parent, **kwargs)
        self.title("Generating...")
        self.resizable(False, False)
        self.transient(parent)
        self.grab_set()

        self.generate_func = generate_func
        self.result: Optional[Image.Image] = None
        self._cancelled = False
        self._error: Optional[str] = None

        # Center on parent
        self.geometry("360x130")
        self.update_idletasks()
        px = parent.winfo_rootx() + (parent.winfo_width() - 360) // 2
        py = parent.winfo_rooty() + (parent.winfo_height() - 130) // 2
        self.geometry(f"+{px}+{py}")

        self._build_ui()
        self._start()

    def _build_ui(self):
        self.configure(bg="#f0f0f0")
        frame = ttk.Frame(self)
        frame.pack(fill=tk.BOTH, expand=True, padx=16, pady=12)

        ttk.Label(frame, text="Waiting for the generation service...",
                  font=("Segoe UI", 10)).pack(pady=(0, 8))

        self.progress_var = tk.DoubleVar(value=0)
        self.progress_bar = ttk.Progressbar(
            frame, variable=self.progress_var, maximum=100, length=300
        )
        self.progress_bar.pack(fill=tk.X, pady=4)

        self.status_label = ttk.Label(frame, text="0%", font=("Segoe UI", 9))
        self.status_label.pack(pady=4)

        self.btn_cancel = ttk.Button(frame, text="Cancel", command=self._cancel)
        self.btn_cancel.pack(pady=(4, 0))

    def _start(self):
        """Run the generation in a background thread."""
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self):
        try:
            self.result = self.generate_func(self._on_progress, self._is_cancelled)
        except GenerationError as e:
            if not self._cancelled:
                self._error = str(e)
        except Exception as e:
            self._error = str(e)
        finally:
            self.after(0, self._finish)

    def _on_progress(self, percent: int):
        """Called from the worker thread to update progress."""
        self.after(0, self._update_ui, percent)

    def _update_ui(self, percent: int):
        self.progress_var.set(percent)
        self.status_label.config(text=f"{percent}%")

    def _is_cancelled(self) -> bool:
        return self._cancelled

    def _cancel(self):
        self._cancelled = True
        self.btn_cancel.config(state="disabled")
        self.btn_cancel.config(text="Cancelling...")

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _finish(self):
        if self._error:
            messagebox.showerror("Generation Error", self._error, parent=self)
        self.grab_release()
        self.destroy()
