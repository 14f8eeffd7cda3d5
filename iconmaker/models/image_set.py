"""Набор изображений иконки с уникальным ключом по размеру.

Принципы:
- SRP: хранит и валидирует изображения, ничего не знает о формате .ico.
- OCP: наблюдатели подписываются на грубое событие "набор изменился"
  и сами решают, что перерисовать.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from PIL import Image

from iconmaker.errors import DuplicateSizeError, MissingImageError
from iconmaker.models.icon_image import CanonicalImage, check_size

logger = logging.getLogger(__name__)

ImageLike = Union[CanonicalImage, Image.Image]
ChangeCallback = Callable[["ImageSet"], None]


def _size_of(image: ImageLike) -> int:
    if image is None:
        raise MissingImageError("Изображение не передано")
    if isinstance(image, CanonicalImage):
        return image.size
    width, height = image.size
    return check_size(width, height)


def _to_canonical(image: ImageLike) -> CanonicalImage:
    if isinstance(image, CanonicalImage):
        return image
    return CanonicalImage.from_pil(image)


class ImageSet:
    """Упорядоченный по возрастанию размера набор канонических изображений.

    Инварианты:
    - не более одного изображения на размер;
    - каждое изображение квадратное, со стороной в [16, 256];
    - порядок обхода не зависит от порядка вставки.
    """

    def __init__(self) -> None:
        self._images: Dict[int, CanonicalImage] = {}
        self._observers: List[ChangeCallback] = []

    # ---- Наблюдатели ----
    def subscribe(self, callback: ChangeCallback) -> None:
        """Регистрирует обработчик события "набор изменился"."""
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            try:
                callback(self)
            except Exception:
                # ошибка наблюдателя не должна ломать изменение набора
                logger.exception("Наблюдатель %r упал при изменении набора", callback)

    # ---- Изменение ----
    def add(self, image: ImageLike) -> None:
        """Добавляет изображение нового размера.

        Raises:
            MissingImageError: если `image` равен None.
            InvalidSizeError: если изображение не квадратное или вне [16, 256].
            DuplicateSizeError: если изображение такого размера уже есть.
        """
        size = _size_of(image)
        if size in self._images:
            raise DuplicateSizeError(size)
        self._images[size] = _to_canonical(image)
        logger.debug("Добавлено изображение %dx%d", size, size)
        self._notify()

    def set(self, image: ImageLike) -> bool:
        """Добавляет изображение или заменяет существующее того же размера.

        Returns:
            True, если набор изменился; False, если содержимое совпало
            с уже хранимым изображением (событие не отправляется).

        Raises:
            MissingImageError: если `image` равен None.
            InvalidSizeError: если изображение не квадратное или вне [16, 256].
        """
        size = _size_of(image)
        canonical = _to_canonical(image)
        if self._images.get(size) == canonical:
            return False
        replaced = size in self._images
        self._images[size] = canonical
        logger.debug("%s изображение %dx%d", "Заменено" if replaced else "Добавлено", size, size)
        self._notify()
        return True

    def remove(self, size: int) -> bool:
        """Удаляет изображение заданного размера; возвращает, было ли удаление."""
        if self._images.pop(size, None) is None:
            return False
        logger.debug("Удалено изображение %dx%d", size, size)
        self._notify()
        return True

    def clear(self) -> None:
        if not self._images:
            return
        self._images.clear()
        logger.debug("Набор изображений очищен")
        self._notify()

    # ---- Чтение ----
    def get(self, size: int) -> Optional[CanonicalImage]:
        return self._images.get(size)

    def sizes(self) -> Tuple[int, ...]:
        return tuple(sorted(self._images))

    def iterate_ascending(self) -> Tuple[Tuple[int, CanonicalImage], ...]:
        """Снимок пар (размер, изображение) по возрастанию размера.

        Снимок не меняется при последующих изменениях набора и может
        обходиться многократно.
        """
        return tuple(sorted(self._images.items()))

    def __iter__(self) -> Iterator[CanonicalImage]:
        return iter([image for _size, image in self.iterate_ascending()])

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, size: object) -> bool:
        return size in self._images

    def __repr__(self) -> str:
        return f"ImageSet(sizes={list(self.sizes())})"
