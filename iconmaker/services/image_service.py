"""Загрузка изображений с диска и приведение к каноническому формату.

Принципы:
- SRP: класс отвечает только за загрузку и преобразование формата пикселей.
- OCP: новые источники (буфер обмена, поток) можно добавить отдельными методами.
- LSP/ISP: возвращает `SourceImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from iconmaker.errors import InvalidSizeError
from iconmaker.models.icon_image import CanonicalImage, check_size
from iconmaker.models.source_image import SourceImage

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> SourceImage:
        """Загружает первый кадр изображения с диска вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` c `PIL.Image.Image` в исходном режиме, размерами и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                opened.seek(0)
                image = opened.copy()
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc
        except (OSError, EOFError) as exc:
            # обрезанный или повреждённый файл
            raise ValueError(f"Не удалось прочитать изображение {path}: {exc}") from exc

        width, height = image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.debug("Загружено %s: %dx%d %s", path, width, height, image.mode)
        return SourceImage(
            path=path,
            image=image,
            width=width,
            height=height,
            mode=image.mode,
            size_bytes=size_bytes,
        )

    def to_canonical(self, source: SourceImage) -> CanonicalImage:
        """Приводит загруженное изображение к BGRA32.

        Raises:
            InvalidSizeError: если изображение не квадратное или вне [16, 256].
        """
        if not source.is_square:
            raise InvalidSizeError(
                f"{source.path.name}: ширина и высота должны совпадать ({source.width}x{source.height})"
            )
        try:
            check_size(source.width, source.height)
        except InvalidSizeError as exc:
            raise InvalidSizeError(f"{source.path.name}: {exc}") from exc
        return CanonicalImage.from_pil(source.image)
