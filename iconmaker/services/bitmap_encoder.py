"""Кодирование изображения в классический блок DIB для записи .ico.

Блок состоит из BITMAPINFOHEADER (40 байт), плоскости цвета (XOR, BGRA32)
и однобитной маски прозрачности (AND). Обе плоскости хранятся снизу вверх.
"""
from __future__ import annotations

import logging
import struct

import numpy as np

from iconmaker.models.icon_image import BYTES_PER_PIXEL, CanonicalImage

logger = logging.getLogger(__name__)

BITMAPINFOHEADER_SIZE = 40
# маска: бит 1 = пиксель прозрачен
MASK_ALPHA_THRESHOLD = 128


def mask_stride(size: int) -> int:
    """Длина строки маски в байтах: ceil(size / 8), выровненная до 4."""
    return (size + 31) // 32 * 4


class BitmapEncoder:
    def encode(self, image: CanonicalImage) -> bytes:
        """
        Возвращает заголовок, плоскость цвета и маску одним блоком байтов.
        """
        size = image.size
        stride = mask_stride(size)
        image_data_size = BYTES_PER_PIXEL * size * size + stride * size

        header = struct.pack(
            "<IiiHHII",
            BITMAPINFOHEADER_SIZE,
            size,
            size * 2,  # XOR + AND
            1,  # planes
            32,  # bits per pixel
            0,  # BI_RGB
            image_data_size,
        ) + bytes(16)

        # Строки снизу вверх
        rows = image.as_array()[::-1]
        color = self._color_plane(rows)
        mask = self._mask_plane(rows, stride)

        logger.debug("Битмап %dx%d: %d байт", size, size, BITMAPINFOHEADER_SIZE + image_data_size)
        return header + color + mask

    def _color_plane(self, rows: np.ndarray) -> bytes:
        # Полностью прозрачные пиксели обнуляются целиком, чтобы не оставлять цвет
        transparent = rows[..., 3] == 0
        plane = np.where(transparent[..., np.newaxis], np.uint8(0), rows).astype(np.uint8)
        return plane.tobytes()

    def _mask_plane(self, rows: np.ndarray, stride: int) -> bytes:
        bits = rows[..., 3] < MASK_ALPHA_THRESHOLD
        packed = np.packbits(bits, axis=1, bitorder="big")
        plane = np.zeros((rows.shape[0], stride), dtype=np.uint8)
        plane[:, : packed.shape[1]] = packed
        return plane.tobytes()
