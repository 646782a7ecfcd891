"""Разбиение сырого буфера на логические строки.

`LineReader` держит явный курсор по буферу и отдаёт строки по `\\n`;
`logical_lines` поверх него отбрасывает комментарии и пустые строки.
"""
from __future__ import annotations

from typing import Iterator, Tuple

COMMENT = ord("#")


class LineReader:
    """Одноразовый итератор строк буфера; разделитель `\\n` в строку не входит."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self.line_number = 0

    def __iter__(self) -> "LineReader":
        return self

    def __next__(self) -> bytes:
        data = self._data
        if self._pos >= len(data):
            raise StopIteration
        end = data.find(b"\n", self._pos)
        if end == -1:
            end = len(data)
        line = data[self._pos:end]
        # step over the delimiter; a final unterminated line just runs to the end
        self._pos = end + 1
        self.line_number += 1
        if line.endswith(b"\r"):
            line = line[:-1]
        return line


def logical_lines(data: bytes) -> Iterator[Tuple[int, bytes]]:
    """Отдаёт пары (номер строки, строка) без комментариев и пустых строк."""
    reader = LineReader(data)
    for line in reader:
        # length first: an empty line has no first byte to inspect
        if not line or line[0] == COMMENT:
            continue
        yield reader.line_number, line
