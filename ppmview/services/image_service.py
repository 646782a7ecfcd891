"""Загрузка файлов P3 с диска и подготовка кадра для отображения.

Принципы:
- SRP: класс отвечает только за чтение файла, декодирование и сборку кадра.
- Кадр RGBA собирается один раз при загрузке; окно лишь перерисовывает его.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from ppmview.models.decode_options import DecodeOptions
from ppmview.models.image_model import ImageData
from ppmview.services.ppm_decoder import PpmDecoder

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, options: Optional[DecodeOptions] = None) -> None:
        self._decoder = PpmDecoder(options)

    def load_image(self, file_path: str | Path) -> ImageData:
        """Читает и декодирует файл P3, возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла `.ppm`.

        Returns:
            `ImageData` c декодированным буфером, RGBA-изображением PIL и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            OSError: если файл не удалось прочитать.
            PpmFormatError: если содержимое не является корректным P3.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        raw = path.read_bytes()
        pixmap = self._decoder.decode(raw, str(file_path))
        if pixmap.width == 0 or pixmap.height == 0:
            pil_image = Image.new("RGBA", (pixmap.width, pixmap.height))
        else:
            pil_image = Image.fromarray(pixmap.to_array())

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Loaded %s (%d x %d, max %d)", path, pixmap.width, pixmap.height, pixmap.max_value)
        return ImageData(
            path=path,
            pixmap=pixmap,
            pil_image=pil_image,
            size_bytes=size_bytes,
        )
