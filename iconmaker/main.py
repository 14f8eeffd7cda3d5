"""Точка входа: сборка .ico из набора изображений из командной строки."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from iconmaker.config import DEFAULT_CONFIG_PATH, Config
from iconmaker.controllers.icon_controller import IconController
from iconmaker.errors import IconMakerError
from iconmaker.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconmaker",
        description="Собирает Windows .ico из квадратных изображений 16..256 px.",
    )
    parser.add_argument("images", nargs="+", help="Файлы изображений (PNG, BMP, GIF, ...)")
    parser.add_argument("-o", "--output", required=True, help="Путь к создаваемому .ico")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Ошибка при повторе размера (по умолчанию последний файл заменяет предыдущий)",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="JSON-файл настроек")
    parser.add_argument("--log-dir", default=None, help="Каталог для файлов журнала")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный вывод")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, собирает иконку и возвращает код выхода."""
    args = build_parser().parse_args(argv)

    config = Config(args.config)
    setup_logging(log_dir=args.log_dir or config.get("log_dir"), verbose=args.verbose)

    try:
        # настройки PNG читаются при создании кодировщика
        controller = IconController()
        for file_path in args.images:
            controller.add_image_file(file_path, replace=not args.strict)
        written = controller.save(args.output)
    except (IconMakerError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    sizes = ", ".join(str(size) for size in controller.images.sizes())
    logger.info("Записано %s (%d байт), размеры: %s", args.output, written, sizes)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
