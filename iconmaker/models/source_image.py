"""Модель исходного изображения, загруженного с диска.

Принципы:
- SRP: только структура данных, без логики кодирования.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class SourceImage:
    """Исходный битмап и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        image: Первый кадр файла в исходном режиме Pillow.
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, например "RGBA" или "P".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]

    @property
    def is_square(self) -> bool:
        return self.width == self.height
