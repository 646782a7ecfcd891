"""Исключения разбора файлов P3.

Все ошибки формата наследуются от `PpmFormatError` (а значит и от `ValueError`),
поэтому вызывающий код может ловить их одной веткой. Ошибки ввода-вывода
остаются встроенными `FileNotFoundError` / `OSError`.
"""
from __future__ import annotations

from typing import Optional


class PpmFormatError(ValueError):
    """Базовая ошибка формата; хранит номер строки файла, если он известен."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class InvalidMagicError(PpmFormatError):
    pass


class InvalidDimensionError(PpmFormatError):
    pass


class InvalidMaxValueError(PpmFormatError):
    pass


class InvalidSampleValueError(PpmFormatError):
    pass


class MalformedLineError(PpmFormatError):
    pass


class PixelCountError(PpmFormatError):
    """Число декодированных пикселей не совпадает с width * height."""
