"""Типизированные ошибки сборки иконки.

Ядро только поднимает исключения; показ сообщений пользователю
остаётся на стороне вызывающего кода (CLI, UI).
"""
from __future__ import annotations


class IconMakerError(Exception):
    """Базовая ошибка пакета."""


class InvalidSizeError(IconMakerError, ValueError):
    """Изображение не квадратное, вне диапазона [16, 256] или с битым буфером."""


class DuplicateSizeError(IconMakerError, ValueError):
    """Размер уже присутствует в наборе; для замены используйте `set`."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Изображение размера {size}x{size} уже есть в иконке")
        self.size = size


class PayloadEncodingError(IconMakerError):
    """Сжатый кодировщик (PNG) не смог закодировать изображение.

    Исходная ошибка доступна через `__cause__`.
    """

    def __init__(self, size: int, message: str) -> None:
        super().__init__(f"Не удалось закодировать изображение {size}x{size}: {message}")
        self.size = size


class MissingImageError(IconMakerError, TypeError):
    """Вместо изображения передан `None`."""
