"""Декодер текстового PPM (P3) в буфер RGBA.

Принципы:
- Один линейный проход: состояние движется MAGIC -> SIZE -> MAX -> DATA,
  конец входа завершает разбор.
- Всё или ничего: любая ошибка формата прерывает декодирование,
  частичное изображение не возвращается.
- Числа разбираются прямо из байтов ASCII, без промежуточных строк.
"""
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from ppmview.models.decode_options import DecodeOptions, FlushPolicy
from ppmview.models.errors import (
    InvalidDimensionError,
    InvalidMagicError,
    InvalidMaxValueError,
    InvalidSampleValueError,
    MalformedLineError,
    PixelCountError,
)
from ppmview.models.image_model import PixmapImage
from ppmview.services.line_reader import logical_lines

logger = logging.getLogger(__name__)

MAGIC = b"P3"
SAMPLE_MAX = 255
OPAQUE = 255
# fits any 32-bit header field
MAX_DIGITS = 10


class DecodeState(Enum):
    MAGIC = auto()
    SIZE = auto()
    MAX = auto()
    DATA = auto()


def _parse_uint(token: bytes) -> Optional[int]:
    """Целое без знака из ASCII-цифр или None (знаки, пробелы, `_` не допускаются).

    Значения длиннее `MAX_DIGITS` значащих цифр тоже дают None.
    """
    if not token.isdigit():
        return None
    digits = token.lstrip(b"0")
    if len(digits) > MAX_DIGITS:
        return None
    return int(digits or b"0")


class _PixelAssembler:
    """Накопитель тройки отсчётов; готовые RGB пишет в плоский список."""

    def __init__(self) -> None:
        self.channels: List[int] = [0, 0, 0]
        self.count = 0
        self.samples: List[int] = []

    def push(self, value: int) -> None:
        self.channels[self.count] = value
        self.count += 1
        if self.count == 3:
            self._emit()

    def start_line(self) -> None:
        self.channels = [0, 0, 0]
        self.count = 0

    def close_line(self, last: int) -> None:
        # legacy: the last token of a line is always blue, red/green keep whatever is held
        self.channels[2] = last
        self._emit()

    def flush(self) -> None:
        if self.count == 0:
            return
        for i in range(self.count, 3):
            self.channels[i] = 0
        self._emit()

    def _emit(self) -> None:
        self.samples.extend(self.channels)
        self.count = 0


class PpmDecoder:
    """Декодер P3 с настраиваемой политикой сброса и масштабированием."""

    def __init__(self, options: Optional[DecodeOptions] = None) -> None:
        self._options = options or DecodeOptions()

    def decode(self, data: bytes, source_name: str) -> PixmapImage:
        """Разбирает буфер целиком и возвращает изображение.

        Args:
            data: Полное содержимое файла.
            source_name: Имя для диагностики и заголовка окна.

        Returns:
            `PixmapImage`, у которого `len(pixels) == width * height`.

        Raises:
            PpmFormatError: любой наследник при нарушении формата.
        """
        legacy = self._options.flush_policy is FlushPolicy.LINE
        state = DecodeState.MAGIC
        width = height = max_value = 0
        assembler = _PixelAssembler()
        line_number = 0

        for line_number, line in logical_lines(data):
            if state is DecodeState.MAGIC:
                if line != MAGIC:
                    raise InvalidMagicError(f"Expected magic {MAGIC!r}, got {line[:16]!r}", line_number)
                state = DecodeState.SIZE
            elif state is DecodeState.SIZE:
                width, height = self._parse_size(line, line_number)
                state = DecodeState.MAX
            elif state is DecodeState.MAX:
                max_value = self._parse_max(line, line_number)
                logger.debug("%s: %dx%d, max value %d", source_name, width, height, max_value)
                state = DecodeState.DATA
            else:
                self._feed_line(assembler, line, line_number, max_value, legacy)

        if state is not DecodeState.DATA:
            raise MalformedLineError(f"Truncated header, missing {state.name} line", line_number or None)
        if not legacy:
            assembler.flush()

        pixels = self._to_pixels(assembler.samples, max_value)
        if len(pixels) != width * height:
            raise PixelCountError(f"Header declares {width}x{height} = {width * height} pixels, decoded {len(pixels)}")
        logger.debug("%s: decoded %d pixels", source_name, len(pixels))
        return PixmapImage(
            source_name=source_name,
            max_value=max_value,
            width=width,
            height=height,
            pixels=pixels,
        )

    # ---- Header ----
    def _parse_size(self, line: bytes, line_number: int) -> Tuple[int, int]:
        parts = line.split(b" ", 1)
        if len(parts) != 2:
            raise InvalidDimensionError(f"Expected '<width> <height>', got {line[:32]!r}", line_number)
        width = _parse_uint(parts[0])
        height = _parse_uint(parts[1])
        if width is None or height is None:
            raise InvalidDimensionError(f"Expected '<width> <height>', got {line[:32]!r}", line_number)
        return width, height

    def _parse_max(self, line: bytes, line_number: int) -> int:
        value = _parse_uint(line)
        if value is None:
            raise InvalidMaxValueError(f"Expected max value, got {line[:32]!r}", line_number)
        return value

    # ---- Data ----
    def _parse_sample(self, token: bytes, line_number: int, max_value: int) -> int:
        if not token:
            raise MalformedLineError("Empty sample token (samples are separated by single spaces)", line_number)
        value = _parse_uint(token)
        if value is None or value > SAMPLE_MAX:
            raise InvalidSampleValueError(f"Sample {token[:16]!r} is not in 0..{SAMPLE_MAX}", line_number)
        if self._options.rescale and value > max_value:
            raise InvalidSampleValueError(f"Sample {value} exceeds max value {max_value}", line_number)
        return value

    def _feed_line(
        self,
        assembler: _PixelAssembler,
        line: bytes,
        line_number: int,
        max_value: int,
        legacy: bool,
    ) -> None:
        values = [self._parse_sample(token, line_number, max_value) for token in line.split(b" ")]
        if not legacy:
            for value in values:
                assembler.push(value)
            return
        assembler.start_line()
        for value in values[:-1]:
            assembler.push(value)
        assembler.close_line(values[-1])

    def _to_pixels(self, samples: List[int], max_value: int) -> Tuple[Tuple[int, int, int, int], ...]:
        rgb = np.asarray(samples, dtype=np.float64).reshape(-1, 3)
        if self._options.rescale and max_value != SAMPLE_MAX:
            if max_value == 0:
                rgb = np.zeros_like(rgb)
            else:
                rgb = np.rint(rgb * (SAMPLE_MAX / max_value))
        rgb_u8 = rgb.astype(np.uint8)
        return tuple((r, g, b, OPAQUE) for r, g, b in rgb_u8.tolist())


def decode_ppm(data: bytes, source_name: str, options: Optional[DecodeOptions] = None) -> PixmapImage:
    """Декодирует буфер P3; чистая функция от входных байтов."""
    return PpmDecoder(options).decode(data, source_name)
