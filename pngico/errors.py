"""Иерархия ошибок конвертера.

Каждый этап конвейера (чтение, декодирование, запись, кодирование) имеет
собственный класс ошибки, чтобы точка входа могла сообщить пользователю,
где именно всё сломалось. Исходная причина всегда прикрепляется через
``raise ... from exc``.
"""
from __future__ import annotations


class PngIcoError(Exception):
    """Базовая ошибка: любое завершение с неуспехом."""


class InputAccessFailure(PngIcoError):
    """Входной файл отсутствует, не читается или доступ запрещён."""


class DecodeFailure(PngIcoError):
    """Входные байты не являются растровым изображением."""


class OutputAccessFailure(PngIcoError):
    """Выходной файл нельзя создать или открыть на запись."""


class EncodeFailure(PngIcoError):
    """Не удалось перекодировать пиксели во встроенный PNG-ресурс."""


class IOFailure(PngIcoError):
    """Запись в приёмник не удалась или записано меньше, чем нужно."""


class ContainerFormatError(PngIcoError):
    """Байты не похожи на ICO-контейнер с одним изображением."""
