"""
Design (ui.py)
- Purpose: Build and manage the Tkinter UI (search box, Treeview, delete/retry buttons, logs).
- Inputs: ListController, persisted search value, FilteredView, RecordLoader.
- Outputs: None (renders UI, forwards user actions to the controller and search value).
- Side effects: Creates windows; desktop notifications on load completion/failure.
- Thread-safety: Tk is pumped from the asyncio loop by run(), so every callback runs on
                 the one event-loop thread.
"""

import asyncio
import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Dict, Tuple

from .config import LOG_MAX_LINES, UI_POLL_SEC
from .errors import LoadError
from .filtering import FilteredView, ViewSnapshot
from .logging_config import APP_LOGGER, build_formatter
from .models import Record, RecordId
from .repository import ListController
from .source import LoadState, RecordLoader
from .storage import PersistedValue
from .utils import format_price, notify_desktop


class _PanelLogHandler(logging.Handler):
    """Forwards houselist log records into the Logs panel."""

    def __init__(self, ui: "AppUI") -> None:
        super().__init__(level=logging.INFO)
        self.setFormatter(build_formatter("plain"))
        self.ui = ui

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.ui.append_log(self.format(record) + "\n")
        except Exception:
            self.handleError(record)


class AppUI:
    """
    Design (AppUI)
    - Purpose: Encapsulate all UI creation and behavior.
    - Public attributes:
        enable_notifications (tk.BooleanVar): toggles desktop notifications
        show_logs (tk.BooleanVar): toggles visibility of the logs panel
    - Public methods:
        run(): start the load and pump Tk until the window closes
        close(): cancel the pending load, detach from the core, destroy the window
    """

    def __init__(
        self,
        root: tk.Tk,
        controller: ListController,
        search: PersistedValue,
        view: FilteredView,
        loader: RecordLoader,
    ):
        self.root = root
        self.controller = controller
        self.search = search
        self.view = view
        self.loader = loader
        self._closed = False
        self._row_ids: Dict[str, RecordId] = {}

        loader.on_loaded = self._on_loaded
        loader.on_failed = self._on_failed

        self.enable_notifications = tk.BooleanVar(value=True)
        self.show_logs = tk.BooleanVar(value=False)
        self.search_var = tk.StringVar(value=search.current_value())

        # Window
        self.root.title("Houses for Sale")
        self.root.rowconfigure(1, weight=1)
        self.root.columnconfigure(0, weight=1)
        self.root.configure(bg="#1e1e1e")
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        style = ttk.Style(self.root)
        style.theme_use("default")
        style.configure(
            "Treeview",
            background="#2b2b2b",
            foreground="#f0f0f0",
            fieldbackground="#2b2b2b",
            rowheight=24,
            font=("Segoe UI", 10),
        )
        style.configure(
            "Treeview.Heading",
            background="#1e1e1e",
            foreground="#ffffff",
            font=("Segoe UI", 10, "bold"),
        )
        style.map("Treeview", background=[('selected', '#444')], foreground=[])

        # Search row
        search_frame = tk.Frame(self.root, bg="#1e1e1e")
        search_frame.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        tk.Label(
            search_frame, text="Search with 2 sec delay:", fg="white", bg="#1e1e1e",
            font=("Segoe UI", 10, "bold"),
        ).pack(side=tk.LEFT)
        self.search_entry = tk.Entry(search_frame, textvariable=self.search_var)
        self.search_entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=5)
        self.search_entry.focus_set()
        self.search_var.trace_add("write", self._on_search_input)

        # Treeview
        self.columns = ("id", "address", "country", "price")
        self.tree = ttk.Treeview(self.root, columns=self.columns, show="headings", selectmode="browse")
        self.tree.grid(row=1, column=0, sticky="nsew", padx=10, pady=5)
        headers = {"id": "ID", "address": "Address", "country": "Country", "price": "Price"}
        for col in self.columns:
            self.tree.heading(col, text=headers[col])
        self.tree.bind("<Delete>", lambda _e: self.delete_selected())

        # Status line
        self.status_var = tk.StringVar(value="")
        tk.Label(self.root, textvariable=self.status_var, fg="#bbbbbb", bg="#1e1e1e", anchor="w").grid(
            row=2, column=0, sticky="ew", padx=10
        )

        # Buttons & toggles
        button_frame = tk.Frame(self.root, bg="#1e1e1e")
        button_frame.grid(row=3, column=0, sticky="ew", padx=10, pady=(5, 10))
        ttk.Button(button_frame, text="Delete", command=self.delete_selected).pack(side=tk.LEFT, padx=5)
        self.retry_button = ttk.Button(button_frame, text="Retry", command=self.retry_load)

        tk.Checkbutton(
            button_frame,
            text="Enable Notifications",
            variable=self.enable_notifications,
            fg="white",
            bg="#1e1e1e",
            selectcolor="#2b2b2b",
            activebackground="#1e1e1e",
            activeforeground="white",
        ).pack(side=tk.RIGHT, padx=5)
        tk.Checkbutton(
            button_frame,
            text="Show Logs",
            variable=self.show_logs,
            fg="white",
            bg="#1e1e1e",
            selectcolor="#2b2b2b",
            command=self.toggle_logs,
        ).pack(side=tk.RIGHT, padx=5)

        self.logs_box = tk.Text(self.root, height=6, bg="#1b1b1b", fg="#dddddd", wrap="none")
        self.logs_box.configure(state="disabled")

        self._log_handler = _PanelLogHandler(self)
        logging.getLogger(APP_LOGGER).addHandler(self._log_handler)
        self._unsubscribe_view = view.subscribe(self.render)

        # Initial paint
        self.render(view.snapshot())

    # ---------- Lifecycle ----------

    async def run(self) -> None:
        """Start the one record load, then pump Tk from the event loop until closed."""
        self.loader.start()
        self._update_status(self.view.snapshot())
        while not self._closed:
            self.root.update()
            await asyncio.sleep(UI_POLL_SEC)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.loader.cancel()
        self._unsubscribe_view()
        self.view.close()
        self.controller.close()
        logging.getLogger(APP_LOGGER).removeHandler(self._log_handler)
        self.root.destroy()

    # ---------- Rendering ----------

    def render(self, snapshot: ViewSnapshot) -> None:
        """
        Purpose: Rebuild the Tree rows from one consistent view snapshot.
        Side effects: Mutates Treeview items (UI only).
        """
        self.tree.delete(*self.tree.get_children())
        self._row_ids.clear()
        for record in snapshot.visible:
            # Tk assigns row ids; ids 1 and "1" would collide as item names
            iid = self.tree.insert("", "end", values=self._row_values(record))
            self._row_ids[iid] = record.id
        self._update_status(snapshot)

    @staticmethod
    def _row_values(record: Record) -> Tuple[str, str, str, str]:
        return str(record.id), record.address, record.country, format_price(record.price)

    def _update_status(self, snapshot: ViewSnapshot) -> None:
        state = self.loader.state
        if state == LoadState.LOADING:
            text = "Loading houses..."
        elif state == LoadState.FAILED:
            text = "Loading failed."
        else:
            text = f"{len(snapshot.visible)} of {len(snapshot.records)} houses shown"
        self.status_var.set(text)

    # ---------- User actions ----------

    def _on_search_input(self, *_args) -> None:
        text = self.search_var.get()
        if text != self.search.current_value():
            self.search.set(text)

    def delete_selected(self) -> None:
        selected = self.tree.selection()
        if not selected:
            messagebox.showinfo("Delete", "Select a house to delete.")
            return
        record_id = self._row_ids.get(selected[0])
        if record_id is not None:
            self.controller.remove(record_id)

    def retry_load(self) -> None:
        self.retry_button.pack_forget()
        self.loader.start()
        self._update_status(self.view.snapshot())

    def toggle_logs(self) -> None:
        if self.show_logs.get():
            self.logs_box.grid(row=4, column=0, sticky="nsew", padx=10, pady=(0, 6))
        else:
            self.logs_box.grid_remove()

    # ---------- Loader callbacks ----------

    def _on_loaded(self, records: Tuple[Record, ...]) -> None:
        self._update_status(self.view.snapshot())
        if self.enable_notifications.get():
            notify_desktop("Houses for Sale", f"{len(records)} houses loaded")

    def _on_failed(self, error: LoadError) -> None:
        self._update_status(self.view.snapshot())
        self.retry_button.pack(side=tk.LEFT, padx=5)
        if self.enable_notifications.get():
            notify_desktop("Houses for Sale", f"Loading failed: {error}")

    # ---------- internal helper for Logs ----------

    def append_log(self, text: str) -> None:
        """Append one line to the Logs panel and trim to LOG_MAX_LINES."""
        if self._closed:
            return
        self.logs_box.configure(state="normal")
        self.logs_box.insert("end", text)
        self.logs_box.see("end")
        total_lines = int(self.logs_box.index("end-1c").split(".")[0])
        if total_lines > LOG_MAX_LINES:
            remove = total_lines - LOG_MAX_LINES
            self.logs_box.delete("1.0", f"{remove + 1}.0")
        self.logs_box.configure(state="disabled")
