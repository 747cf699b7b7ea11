# schooldir/errors.py
from __future__ import annotations

from typing import Optional


class SchoolDirectoryError(Exception):
    """Базовое исключение приложения."""


class InvalidInputError(SchoolDirectoryError, ValueError):
    """
    Некорректные или вне допустимого диапазона входные данные.
    Отдаётся клиенту как 400, не повторяется.
    location — откуда пришло значение: body (создание) или query (поиск).
    """

    def __init__(self, field: str, message: str, value: Optional[object] = None, location: str = "body"):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.value = value
        self.location = location

    def as_dict(self) -> dict:
        return {"field": self.field, "msg": self.message, "location": self.location}


class StorageError(SchoolDirectoryError):
    """Хранилище недоступно или отклонило операцию. Исходная ошибка — в __cause__."""
