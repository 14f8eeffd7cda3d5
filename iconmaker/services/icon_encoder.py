"""Сборка контейнера .ico из набора изображений.

Принципы:
- SRP: только раскладка заголовка, каталога и полезной нагрузки.
- DIP: кодировщики полезной нагрузки передаются извне; по умолчанию
  используются `BitmapEncoder` и `PngEncoder`.

Формат: ICONDIR (6 байт) + n * ICONDIRENTRY (16 байт) + блоки данных
в том же порядке, что и записи каталога. Все числа little-endian.
"""
from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from iconmaker.errors import PayloadEncodingError
from iconmaker.models.icon_image import CanonicalImage
from iconmaker.models.image_set import ImageSet
from iconmaker.services.bitmap_encoder import BitmapEncoder
from iconmaker.services.png_encoder import PngEncoder

logger = logging.getLogger(__name__)

HEADER_SIZE = 6
DIRECTORY_ENTRY_SIZE = 16
ICON_TYPE = 1  # 2 = cursor
PNG_THRESHOLD = 256


class IconEncoder:
    def __init__(
        self,
        bitmap_encoder: Optional[BitmapEncoder] = None,
        png_encoder: Optional[PngEncoder] = None,
    ) -> None:
        self._bitmap_encoder = bitmap_encoder or BitmapEncoder()
        self._png_encoder = png_encoder or PngEncoder()

    def encode(self, image_set: ImageSet) -> bytes:
        """Сериализует набор в байты файла .ico.

        Результат детерминирован: одинаковое содержимое набора даёт
        побайтно одинаковый файл. Пустой набор даёт 6-байтовый заголовок.

        Raises:
            PayloadEncodingError: если сжатый кодировщик не справился.
        """
        # Один снимок задаёт порядок и каталога, и данных
        entries = image_set.iterate_ascending()
        payloads = [self.encode_payload(image) for _size, image in entries]

        count = len(entries)
        parts: List[bytes] = [struct.pack("<HHH", 0, ICON_TYPE, count)]
        offset = HEADER_SIZE + DIRECTORY_ENTRY_SIZE * count
        for (size, _image), data in zip(entries, payloads):
            parts.append(
                struct.pack(
                    "<BBBBHHII",
                    size % 256,  # 256 записывается как 0
                    size % 256,
                    0,  # colours, 0 = more than 256
                    0,  # reserved
                    1,  # colour planes
                    32,  # bits per pixel
                    len(data),
                    offset,
                )
            )
            offset += len(data)
        parts.extend(payloads)

        result = b"".join(parts)
        logger.debug("Иконка собрана: изображений %d, %d байт", count, len(result))
        return result

    def encode_payload(self, image: CanonicalImage) -> bytes:
        """Выбирает кодировку по размеру: DIB для < 256, PNG для 256."""
        if image.size < PNG_THRESHOLD:
            return self._bitmap_encoder.encode(image)
        try:
            return self._png_encoder.encode(image)
        except PayloadEncodingError:
            raise
        except Exception as exc:
            raise PayloadEncodingError(image.size, str(exc)) from exc

    def save(self, image_set: ImageSet, target: Union[str, Path, BinaryIO]) -> int:
        """Кодирует набор и записывает его в файл или бинарный поток.

        Кодирование выполняется целиком до записи, поэтому при ошибке
        файл не создаётся. Возвращает число записанных байтов.
        """
        data = self.encode(image_set)
        if isinstance(target, (str, Path)):
            with open(target, "wb") as stream:
                stream.write(data)
            logger.info("Сохранено %s (%d байт)", target, len(data))
        else:
            target.write(data)
        return len(data)
