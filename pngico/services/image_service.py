"""Загрузка исходных изображений с диска или из памяти.

Принципы:
- SRP: класс отвечает только за чтение и декодирование, без нормализации пикселей.
- Ошибки доступа и ошибки формата разделены (`InputAccessFailure` / `DecodeFailure`).
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from pngico.errors import DecodeFailure, InputAccessFailure
from pngico.models.image_model import SourceImage

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> SourceImage:
        """Читает файл с диска и декодирует его.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` с полностью загруженным `PIL.Image.Image` в исходном режиме.

        Raises:
            InputAccessFailure: если путь не существует, не является файлом или не читается.
            DecodeFailure: если содержимое не распознано как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise InputAccessFailure(f"could not open input file: {path} does not exist")

        try:
            data = path.read_bytes()
        except OSError as exc:
            raise InputAccessFailure(f"could not open input file: {path}: {exc}") from exc

        return self.decode_bytes(data, path=path)

    def decode_bytes(self, data: bytes, path: Optional[Path] = None) -> SourceImage:
        """Декодирует изображение из байтов.

        Пиксели загружаются сразу (`Image.load()`), чтобы обрезанный файл
        падал здесь, а не внутри кодировщика.
        """
        name = str(path) if path is not None else "<bytes>"
        try:
            pil_image = Image.open(io.BytesIO(data))
            pil_image.load()
        except UnidentifiedImageError as exc:
            raise DecodeFailure(f"could not decode input image {name}: not a supported image") from exc
        except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
            raise DecodeFailure(f"could not decode input image {name}: {exc}") from exc

        width, height = pil_image.size
        logger.debug("Decoded %s: %s %dx%d", name, pil_image.format, width, height)

        return SourceImage(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=len(data),
        )
