"""Каноническое изображение иконки: квадрат, 32 бита на пиксель, порядок BGRA.

Принципы:
- SRP: только структура данных и преобразование формата пикселей.
- Чистый код: неизменяемость (`frozen=True`), пиксели хранятся в `bytes`,
  поэтому равенство означает равенство содержимого.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from iconmaker.errors import InvalidSizeError

MIN_SIZE = 16
MAX_SIZE = 256
BYTES_PER_PIXEL = 4

# RGBA <-> BGRA: перестановка симметрична
_SWAP_RB = [2, 1, 0, 3]


def check_size(width: int, height: int) -> int:
    """Проверяет размеры исходного изображения и возвращает сторону квадрата.

    Raises:
        InvalidSizeError: если изображение не квадратное или вне [16, 256].
    """
    if width != height:
        raise InvalidSizeError(f"Ширина и высота должны совпадать: {width}x{height}")
    if width > MAX_SIZE:
        raise InvalidSizeError(f"Изображение слишком большое: {width}x{height} (максимум {MAX_SIZE})")
    if width < MIN_SIZE:
        raise InvalidSizeError(f"Изображение слишком маленькое: {width}x{height} (минимум {MIN_SIZE})")
    return width


@dataclass(frozen=True)
class CanonicalImage:
    """Неизменяемое квадратное изображение в формате BGRA32.

    Fields:
        size: Сторона квадрата, px, в диапазоне [16, 256].
        pixels: Пиксели построчно сверху вниз, 4 байта B, G, R, A на пиксель.
    """
    size: int
    pixels: bytes

    def __post_init__(self) -> None:
        check_size(self.size, self.size)
        expected = BYTES_PER_PIXEL * self.size * self.size
        if len(self.pixels) != expected:
            raise InvalidSizeError(
                f"Буфер пикселей {len(self.pixels)} байт не соответствует размеру "
                f"{self.size}x{self.size} (ожидалось {expected})"
            )

    def as_array(self) -> np.ndarray:
        """Возвращает read-only массив формы (size, size, 4), каналы B, G, R, A."""
        arr = np.frombuffer(self.pixels, dtype=np.uint8)
        return arr.reshape(self.size, self.size, BYTES_PER_PIXEL)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "CanonicalImage":
        """Приводит изображение Pillow любого режима к каноническому BGRA32.

        Raises:
            InvalidSizeError: если изображение не квадратное или вне [16, 256].
        """
        width, height = image.size
        size = check_size(width, height)
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        arr = np.asarray(rgba, dtype=np.uint8)[..., _SWAP_RB]
        return cls(size=size, pixels=np.ascontiguousarray(arr).tobytes())

    def to_pil(self) -> Image.Image:
        """Возвращает копию изображения в режиме RGBA."""
        rgba = np.ascontiguousarray(self.as_array()[..., _SWAP_RB])
        return Image.fromarray(rgba)
