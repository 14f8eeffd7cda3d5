from __future__ import annotations

import io
import logging
from typing import Optional

from iconmaker.config import Config
from iconmaker.errors import PayloadEncodingError
from iconmaker.models.icon_image import CanonicalImage

logger = logging.getLogger(__name__)


class PngEncoder:
    """Сжатое представление больших изображений иконки (PNG внутри .ico)."""

    def __init__(self, compress_level: Optional[int] = None, optimize: Optional[bool] = None) -> None:
        config = Config()
        self.compress_level = (
            compress_level if compress_level is not None else config.get_int("png_compress_level", 9)
        )
        self.optimize = optimize if optimize is not None else config.get_bool("png_optimize", False)

    def encode(self, image: CanonicalImage) -> bytes:
        """
        Кодирует изображение в самодостаточный PNG-блоб.

        Raises:
            PayloadEncodingError: если Pillow не смог сохранить PNG.
        """
        buffer = io.BytesIO()
        try:
            image.to_pil().save(
                buffer,
                format="PNG",
                compress_level=self.compress_level,
                optimize=self.optimize,
            )
        except (OSError, ValueError) as exc:
            raise PayloadEncodingError(image.size, str(exc)) from exc
        data = buffer.getvalue()
        logger.debug("PNG %dx%d: %d байт", image.size, image.size, len(data))
        return data
