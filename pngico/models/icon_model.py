"""Модели каталога ICO-контейнера.

Принципы:
- SRP: только структура заголовка/записи каталога и их бинарная раскладка.
- Неизменяемость (`frozen=True`): запись каталога «дозаполняется» через
  `with_dimensions` / `with_resource_size`, каждый шаг возвращает новый объект.

Раскладка (все многобайтовые поля little-endian, без выравнивания):

    ICONDIR       reserved(2) type(2) count(2)                      = 6 байт
    ICONDIRENTRY  width(1) height(1) numColors(1) reserved(1)
                  colorPlanes(2) bitsPerPixel(2) sizeInBytes(4)
                  offset(4)                                         = 16 байт
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, replace

HEADER_FORMAT = "<HHH"
ENTRY_FORMAT = "<BBBBHHII"

HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 6
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)  # 16
# single image: resource always starts right after header + one entry
RESOURCE_OFFSET = HEADER_SIZE + ENTRY_SIZE  # 22

ICON_TYPE = 1
CURSOR_TYPE = 2

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class IconDir:
    """Заголовок файла: зарезервированное поле, тип ресурса, число изображений.

    Fields:
        reserved: Всегда 0.
        image_type: 1 — иконка, 2 — курсор (курсоры не создаются).
        count: Количество изображений в файле.
    """
    reserved: int = 0
    image_type: int = ICON_TYPE
    count: int = 1

    def to_bytes(self) -> bytes:
        return struct.pack(HEADER_FORMAT, self.reserved, self.image_type, self.count)

    @classmethod
    def from_bytes(cls, data: bytes) -> "IconDir":
        reserved, image_type, count = struct.unpack_from(HEADER_FORMAT, data, 0)
        return cls(reserved=reserved, image_type=image_type, count=count)


@dataclass(frozen=True)
class IconDirEntry:
    """Запись каталога, описывающая одно встроенное изображение.

    Fields:
        width: Ширина, px, по модулю 256 (256 кодируется как 0).
        height: Высота, px, по модулю 256.
        num_colors: Размер палитры; для PNG-ресурса 0.
        reserved: Всегда 0.
        color_planes: Число цветовых плоскостей, 1.
        bits_per_pixel: Глубина цвета, 32 (RGBA).
        size_in_bytes: Длина встроенного ресурса.
        offset: Смещение ресурса от начала файла.
    """
    width: int = 0
    height: int = 0
    num_colors: int = 0
    reserved: int = 0
    color_planes: int = 1
    bits_per_pixel: int = 32
    size_in_bytes: int = 0
    offset: int = RESOURCE_OFFSET

    def with_dimensions(self, width: int, height: int) -> "IconDirEntry":
        """Возвращает запись с размерами, усечёнными до одного байта.

        Формат хранит размер в одном байте, и 256 записывается как 0. Усечение
        применяется к любому размеру, поэтому 300 превращается в 44: так ведёт
        себя исходный инструмент, и вывод остаётся с ним совместимым.
        """
        return replace(self, width=width % 256, height=height % 256)

    def with_resource_size(self, length: int) -> "IconDirEntry":
        if length < 0 or length > _UINT32_MAX:
            raise ValueError(f"Resource length does not fit in 32 bits: {length}")
        return replace(self, size_in_bytes=length)

    def to_bytes(self) -> bytes:
        return struct.pack(
            ENTRY_FORMAT,
            self.width,
            self.height,
            self.num_colors,
            self.reserved,
            self.color_planes,
            self.bits_per_pixel,
            self.size_in_bytes,
            self.offset,
        )

    @classmethod
    def from_bytes(cls, data: bytes, offset: int = HEADER_SIZE) -> "IconDirEntry":
        return cls(*struct.unpack_from(ENTRY_FORMAT, data, offset))


def build_header() -> IconDir:
    """Заголовок файла с одним изображением-иконкой: (0, 1, 1)."""
    return IconDir()


def build_entry_template() -> IconDirEntry:
    """Запись с умолчаниями; размеры и длину ресурса дописывает кодировщик."""
    return IconDirEntry()


@dataclass(frozen=True)
class EncodeResult:
    """Итог кодирования, для логов и вывода в консоль.

    Fields:
        width: Исходная ширина, px (без усечения).
        height: Исходная высота, px.
        resource_size: Длина встроенного PNG.
        total_size: Общая длина файла, `RESOURCE_OFFSET + resource_size`.
    """
    width: int
    height: int
    resource_size: int
    total_size: int


@dataclass(frozen=True)
class IconInfo:
    """Разобранный ICO-файл: заголовок, первая запись и сам ресурс."""
    header: IconDir
    entry: IconDirEntry
    resource: bytes
