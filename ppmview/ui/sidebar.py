"""Боковая панель: открытие файла, сведения о заголовке P3, пиксель под курсором.

Принципы:
- SRP: управляет только отображением информации, не содержит разбора файлов.
- ISP: события наружу через `on_*`, данные внутрь через `set_*` / `update_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from ppmview.models.image_model import ImageData

PLACEHOLDER = "—"


def _rgba_to_hex(rgba: Tuple[int, int, int, int]) -> str:
    """Преобразует RGBA в HEX (без альфа)."""
    r, g, b, _a = rgba
    return f"#{r:02X}{g:02X}{b:02X}"


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return PLACEHOLDER
    if size_bytes < 1024:
        return f"{size_bytes} B"
    return f"{size_bytes / 1024:.1f} KB"


class Sidebar(ctk.CTkFrame):
    """Панель с блоками: файл, информация, курсор."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        self.on_open_file: Optional[Callable[[], None]] = None

        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть PPM…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value=PLACEHOLDER)
        self._size_val = ctk.StringVar(value=PLACEHOLDER)
        self._dims_val = ctk.StringVar(value=PLACEHOLDER)
        self._max_val = ctk.StringVar(value=PLACEHOLDER)

        info_vars = (self._path_val, self._size_val, self._dims_val, self._max_val)
        for row, var in enumerate(info_vars, start=3):
            label = ctk.CTkLabel(self, textvariable=var, wraplength=250, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=7, column=0, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value=PLACEHOLDER)
        self._cursor_rgba_val = ctk.StringVar(value=PLACEHOLDER)
        self._cursor_hex_val = ctk.StringVar(value=PLACEHOLDER)

        cursor_vars = (self._cursor_xy_val, self._cursor_rgba_val, self._cursor_hex_val)
        for row, var in enumerate(cursor_vars, start=8):
            label = ctk.CTkLabel(self, textvariable=var, anchor="w", justify="left")
            label.grid(row=row, column=0, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

    # ---- Public API ----
    def set_image_info(self, data: ImageData) -> None:
        pixmap = data.pixmap
        self._path_val.set(f"Путь: {data.path}")
        self._size_val.set(f"Размер файла: {_format_size(data.size_bytes)}")
        self._dims_val.set(f"Размеры: {pixmap.width} × {pixmap.height} px")
        self._max_val.set(f"Макс. значение: {pixmap.max_value}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set(PLACEHOLDER)
            self._cursor_rgba_val.set(PLACEHOLDER)
            self._cursor_hex_val.set(PLACEHOLDER)
            return
        r, g, b, a = rgba
        self._cursor_xy_val.set(f"X: {x}, Y: {y}")
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}")
        self._cursor_hex_val.set(f"HEX: {_rgba_to_hex(rgba)}")

    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()
