"""Контроллер приложения: оркестрация UI и сервиса загрузки.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики разбора P3).
- DIP: сервис загрузки передаётся снаружи вместе с опциями декодера.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from tkinter import filedialog, messagebox, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from ppmview.models.errors import PpmFormatError
from ppmview.models.image_model import ImageData
from ppmview.services.image_service import ImageService
from ppmview.ui.bottom_bar import BottomBar
from ppmview.ui.image_viewer import ImageViewer
from ppmview.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Показ уже загруженного изображения и загрузка новых через `ImageService`.
    - Синхронизация масштаба между канвой и нижней панелью.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    image_service: ImageService

    def bind_events(self) -> None:
        """Регистрирует обработчики; компоненты UI общаются только через контроллер."""
        self.sidebar.on_open_file = self._handle_open_file
        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit

    def show_image(self, image_data: ImageData) -> None:
        """Отображает загруженное изображение и обновляет заголовок окна."""
        self.window.title(image_data.pixmap.title)
        self.viewer.set_image(image_data.pil_image)
        self.sidebar.set_image_info(image_data)
        self._handle_zoom_fit()

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Portable Pixmap", "*.ppm"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            image_data = self.image_service.load_image(file_path)
        except (OSError, PpmFormatError) as exc:
            # keep the current image on a failed load
            logger.warning("Cannot open %s: %s", file_path, exc)
            messagebox.showerror("Ошибка", f"Не удалось открыть {file_path}:\n{exc}", parent=self.window)
            return
        self.show_image(image_data)

    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync bottom slider when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
