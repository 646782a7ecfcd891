"""Параметры декодера P3.

Принципы:
- Неизменяемость (`frozen=True`): один набор опций на весь проход.
- Значения по умолчанию соответствуют поведению CLI без флагов.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FlushPolicy(Enum):
    """Когда дописывать неполную тройку отсчётов как отдельный пиксель."""

    END_OF_DATA = "end-of-data"  # one flush after the last data line
    LINE = "line"  # legacy: flush at the end of every data line


@dataclass(frozen=True)
class DecodeOptions:
    """Настройки декодирования.

    Fields:
        flush_policy: Политика сброса неполной тройки, см. `FlushPolicy`.
        rescale: Масштабировать отсчёты из [0, max_value] в [0, 255].
    """
    flush_policy: FlushPolicy = FlushPolicy.END_OF_DATA
    rescale: bool = False
