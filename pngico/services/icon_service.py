"""Кодирование ICO-контейнера с одним встроенным PNG.

Конвейер (без состояния между вызовами):
1) Нормализация исходника в «прямой» 8-битный RGBA-буфер тех же размеров.
2) PNG-кодирование буфера в память — длина ресурса должна быть известна заранее,
   т.к. поле `size_in_bytes` стоит в файле перед самими данными.
3) Заголовок + запись каталога (шаблон, затем размеры и длина ресурса).
4) Сериализация заголовка и записи во второй буфер (22 байта).
5) Две записи в приёмник: сначала 22 байта каталога, затем ресурс.
"""
from __future__ import annotations

import io
import logging
from typing import BinaryIO

import numpy as np
from PIL import Image

from pngico.errors import ContainerFormatError, EncodeFailure, IOFailure
from pngico.models.icon_model import (
    ICON_TYPE,
    RESOURCE_OFFSET,
    EncodeResult,
    IconDir,
    IconDirEntry,
    IconInfo,
    build_entry_template,
    build_header,
)

logger = logging.getLogger(__name__)

# 16-bit / float modes that Pillow cannot convert straight to RGBA
_WIDE_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N", "F")


class IconService:
    # ---------- 1) Нормализация ----------
    def normalize(self, image: Image.Image) -> Image.Image:
        """
        Возвращает новое изображение RGBA (8 бит на канал, альфа не premultiplied)
        тех же размеров. Палитра, оттенки серого, premultiplied-альфа и т.п.
        отбрасываются.
        """
        if image.mode in _WIDE_MODES:
            image = self._wide_to_gray(image)
        rgba = image.convert("RGBA")
        arr = np.ascontiguousarray(np.asarray(rgba, dtype=np.uint8))
        # (h, w, 4) uint8 -> RGBA
        return Image.fromarray(arr)

    def _wide_to_gray(self, image: Image.Image) -> Image.Image:
        """
        16-битные и float-изображения в оттенки серого [0..255].
        """
        arr = np.asarray(image, dtype=np.float64)
        if image.mode != "F":
            arr = arr / 257.0
        out = np.clip(np.rint(arr), 0, 255).astype(np.uint8)
        return Image.fromarray(out)

    # ---------- 2) Встроенный ресурс ----------
    def encode_resource(self, image: Image.Image) -> bytes:
        """
        PNG-кодирование нормализованного изображения в память.
        """
        width, height = image.size
        if width <= 0 or height <= 0:
            raise EncodeFailure(f"cannot encode an empty image ({width}x{height})")

        buffer = io.BytesIO()
        try:
            image.save(buffer, format="PNG")
        except (OSError, ValueError) as exc:
            raise EncodeFailure(f"could not encode image resource: {exc}") from exc
        return buffer.getvalue()

    # ---------- 3-4) Каталог ----------
    def build_entry(self, width: int, height: int, resource_size: int) -> IconDirEntry:
        return build_entry_template().with_dimensions(width, height).with_resource_size(resource_size)

    def build_layout(self, width: int, height: int, resource: bytes) -> bytes:
        """
        Заголовок и запись каталога одним 22-байтным блоком.
        """
        entry = self.build_entry(width, height, len(resource))
        return build_header().to_bytes() + entry.to_bytes()

    # ---------- 5) Запись ----------
    def encode(self, image: Image.Image, sink: BinaryIO) -> EncodeResult:
        """
        Полный конвейер: нормализация, PNG-ресурс, каталог, две записи в `sink`.

        Raises:
            EncodeFailure: если PNG-кодирование не удалось.
            IOFailure: если запись в приёмник упала или была неполной.
                Частично записанный приёмник не чистится, это дело вызывающего.
        """
        if image.width <= 0 or image.height <= 0:
            raise EncodeFailure(f"cannot encode an empty image ({image.width}x{image.height})")
        normalized = self.normalize(image)
        resource = self.encode_resource(normalized)
        width, height = normalized.size
        layout = self.build_layout(width, height, resource)

        self._write_all(sink, layout, "icon directory")
        self._write_all(sink, resource, "image resource")

        result = EncodeResult(
            width=width,
            height=height,
            resource_size=len(resource),
            total_size=len(layout) + len(resource),
        )
        logger.debug("Encoded %dx%d icon: %d byte resource, %d bytes total",
                     width, height, result.resource_size, result.total_size)
        return result

    def encode_bytes(self, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        self.encode(image, buffer)
        return buffer.getvalue()

    def _write_all(self, sink: BinaryIO, data: bytes, what: str) -> None:
        try:
            written = sink.write(data)
        except OSError as exc:
            raise IOFailure(f"could not write {what}: {exc}") from exc
        if written is None or written != len(data):
            raise IOFailure(f"short write of {what}: {written} of {len(data)} bytes")

    # ---------- Разбор готового файла ----------
    def inspect(self, data: bytes) -> IconInfo:
        """
        Разбирает заголовок и первую запись каталога и вырезает ресурс.

        Raises:
            ContainerFormatError: если данные не являются ICO-иконкой
                или запись указывает за пределы файла.
        """
        if len(data) < RESOURCE_OFFSET:
            raise ContainerFormatError(f"icon file is too short: {len(data)} bytes")

        header = IconDir.from_bytes(data)
        if header.reserved != 0 or header.image_type != ICON_TYPE:
            raise ContainerFormatError(
                f"not an icon file (reserved={header.reserved}, type={header.image_type})"
            )
        if header.count < 1:
            raise ContainerFormatError("icon file contains no images")

        entry = IconDirEntry.from_bytes(data)
        end = entry.offset + entry.size_in_bytes
        if entry.offset < RESOURCE_OFFSET or end > len(data):
            raise ContainerFormatError(
                f"image resource [{entry.offset}, {end}) lies outside the file ({len(data)} bytes)"
            )
        return IconInfo(header=header, entry=entry, resource=data[entry.offset:end])
