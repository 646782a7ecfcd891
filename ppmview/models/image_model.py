"""Модели данных для изображений.

Принципы:
- SRP: только структура данных и копирование пикселей, без разбора файлов.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image

Rgba = Tuple[int, int, int, int]


@dataclass(frozen=True)
class PixmapImage:
    """Результат декодирования P3: RGBA-пиксели и метаданные заголовка.

    Fields:
        source_name: Имя источника, только для диагностики и заголовка окна.
        max_value: Максимальное значение отсчёта из заголовка.
        width: Ширина, px.
        height: Высота, px.
        pixels: RGBA-четвёрки построчно, первым идёт левый верхний пиксель.
    """
    source_name: str
    max_value: int
    width: int
    height: int
    pixels: Tuple[Rgba, ...]

    @property
    def title(self) -> str:
        return f"{self.source_name} - {self.width} x {self.height}"

    def draw(self, frame: bytearray | memoryview) -> None:
        """Копирует пиксели в готовый буфер кадра по 4 байта на пиксель.

        Args:
            frame: Записываемая область ровно на `width * height * 4` байт.

        Raises:
            ValueError: если размер области не совпадает с числом пикселей.
        """
        view = memoryview(frame).cast("B")
        expected = len(self.pixels) * 4
        if view.nbytes != expected:
            raise ValueError(f"Frame holds {view.nbytes} bytes, expected {expected}")
        for i, quad in enumerate(self.pixels):
            offset = i * 4
            view[offset:offset + 4] = bytes(quad)

    def to_bytes(self) -> bytes:
        frame = bytearray(len(self.pixels) * 4)
        self.draw(frame)
        return bytes(frame)

    def to_array(self) -> np.ndarray:
        """Возвращает массив uint8 формы (height, width, 4)."""
        return np.asarray(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class ImageData:
    """Загруженный файл: декодированный буфер и готовое PIL-изображение.

    Fields:
        path: Путь к исходному файлу.
        pixmap: Результат декодирования.
        pil_image: RGBA-изображение PIL, собранное из буфера один раз.
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pixmap: PixmapImage
    pil_image: Image.Image
    size_bytes: Optional[int]

    @property
    def width(self) -> int:
        return self.pixmap.width

    @property
    def height(self) -> int:
        return self.pixmap.height
