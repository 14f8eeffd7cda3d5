"""Контроллер сеанса редактирования иконки (без привязки к UI).

SOLID:
- SRP: класс управляет текущей иконкой и флагом изменений, без логики формата.
- DIP: зависит от сервисов как от ролей; конкретные реализации можно подменить.
Clean Code:
- Методы компактны; загрузка и кодирование вынесены в сервисы.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PIL import Image

from iconmaker.models.icon_image import MAX_SIZE, MIN_SIZE
from iconmaker.models.image_set import ImageSet
from iconmaker.services.icon_encoder import IconEncoder
from iconmaker.services.image_service import ImageService

logger = logging.getLogger(__name__)


@dataclass
class IconController:
    """Связывает внешние действия пользователя с набором изображений.

    Ответственности:
    - Добавление изображений из файлов и "вставка" готовых изображений.
    - Удаление размеров, создание новой иконки.
    - Сохранение через `IconEncoder` и отслеживание несохранённых изменений.
    """
    image_service: ImageService = field(default_factory=ImageService)
    encoder: IconEncoder = field(default_factory=IconEncoder)
    images: ImageSet = field(default_factory=ImageSet)
    modified: bool = False

    def __post_init__(self) -> None:
        self.images.subscribe(self._handle_images_changed)

    # ---- Actions ----
    def add_image_file(self, file_path: str | Path, replace: bool = True) -> int:
        """Загружает файл и кладёт его в иконку; возвращает размер изображения.

        При `replace=False` изображение добавляется через `add` и повтор размера
        считается ошибкой.

        Raises:
            FileNotFoundError, ValueError: ошибки загрузки файла.
            InvalidSizeError, DuplicateSizeError: ошибки набора изображений.
        """
        source = self.image_service.load_image(file_path)
        canonical = self.image_service.to_canonical(source)
        if replace:
            self.images.set(canonical)
        else:
            self.images.add(canonical)
        logger.info(
            "Импортировано %s (%s, %s байт) как %dx%d",
            source.path.name,
            source.mode,
            source.size_bytes if source.size_bytes is not None else "?",
            canonical.size,
            canonical.size,
        )
        return canonical.size

    def add_image(self, image: Optional[Image.Image]) -> bool:
        """Вставляет готовое изображение (например, из буфера обмена).

        Подходящие изображения заменяют существующие того же размера,
        неподходящие молча отклоняются.
        """
        if not self.can_accept(image):
            return False
        self.images.set(image)
        return True

    def remove_size(self, size: int) -> bool:
        return self.images.remove(size)

    def new_icon(self) -> None:
        """Начинает новую пустую иконку и сбрасывает флаг изменений."""
        self.images.unsubscribe(self._handle_images_changed)
        self.images = ImageSet()
        self.images.subscribe(self._handle_images_changed)
        self.modified = False

    def save(self, file_path: str | Path) -> int:
        written = self.encoder.save(self.images, file_path)
        self.modified = False
        return written

    # ---- State ----
    @property
    def can_save(self) -> bool:
        return len(self.images) > 0

    @property
    def has_unsaved_changes(self) -> bool:
        return self.modified and len(self.images) > 0

    @staticmethod
    def can_accept(image: Optional[Image.Image]) -> bool:
        if image is None:
            return False
        width, height = image.size
        return width == height and MIN_SIZE <= width <= MAX_SIZE

    # ---- Handlers ----
    def _handle_images_changed(self, _images: ImageSet) -> None:
        self.modified = True
