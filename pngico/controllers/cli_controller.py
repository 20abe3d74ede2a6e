"""Контроллер командной строки: оркестрация файлов и сервисов.

SOLID:
- SRP: класс управляет файлами и связями между сервисами (без бинарной раскладки).
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pngico.errors import InputAccessFailure, OutputAccessFailure
from pngico.models.icon_model import EncodeResult, IconInfo
from pngico.services.icon_service import IconService
from pngico.services.image_service import ImageService

logger = logging.getLogger(__name__)


@dataclass
class CliController:
    """Связывает аргументы командной строки с прикладной логикой.

    Ответственности:
    - Загрузка исходника через `ImageService` до того, как трогать выходной файл.
    - Открытие выходного файла и запись контейнера через `IconService`.
    - Разбор готового ICO для команды `--inspect`.
    """
    _image_service: ImageService = ImageService()
    _icon_service: IconService = IconService()

    def run(self, input_path: str | Path, output_path: str | Path) -> EncodeResult:
        source = self._image_service.load_image(input_path)
        logger.info("Loaded %s (%s, %dx%d)", source.path, source.mode, source.width, source.height)
        if source.width > 255 or source.height > 255:
            logger.warning(
                "%dx%d does not fit the one-byte size fields; directory will record %dx%d",
                source.width, source.height, source.width % 256, source.height % 256,
            )

        out = Path(output_path)
        try:
            sink = out.open("wb")
        except OSError as exc:
            raise OutputAccessFailure(f"could not open output file: {out}: {exc}") from exc

        with sink:
            result = self._icon_service.encode(source.pil_image, sink)

        logger.info("Wrote %s (%d bytes)", out, result.total_size)
        return result

    def inspect(self, path: str | Path) -> IconInfo:
        p = Path(path)
        try:
            data = p.read_bytes()
        except OSError as exc:
            raise InputAccessFailure(f"could not open icon file: {p}: {exc}") from exc
        return self._icon_service.inspect(data)
