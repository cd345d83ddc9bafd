"""
Построение параметризованных INSERT/UPDATE для репозиториев.
Имена колонок берутся только из whitelist репозитория, значения идут через $n.
"""

from contextlib import contextmanager
from typing import Any, Iterable, Iterator

import asyncpg

from src.common.exceptions import BadRequestError, ConflictError


@contextmanager
def integrity_errors(action: str) -> Iterator[None]:
    """
    Переводит нарушения ограничений PostgreSQL в доменные ошибки (HTTP 400).

    Example:
        with integrity_errors("Error creating client"):
            client = await self.repository.create(values)
    """
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise ConflictError(f"{action}: {e.detail or e}") from e
    except asyncpg.IntegrityConstraintViolationError as e:
        raise BadRequestError(f"{action}: {e.detail or e}") from e


def build_insert(
    table: str,
    values: dict[str, Any],
    returning: str,
    allowed_fields: Iterable[str],
) -> tuple[str, list[Any]]:
    """
    Формирует INSERT ... RETURNING.

    Returns:
        (SQL, параметры)
    """
    allowed = set(allowed_fields)
    columns = [key for key in values if key in allowed]
    if not columns:
        raise ValueError(f"Нет колонок для вставки в {table}")

    placeholders = ", ".join(f"${idx}" for idx in range(1, len(columns) + 1))
    query = f"""
        INSERT INTO {table} ({", ".join(columns)})
        VALUES ({placeholders})
        RETURNING {returning}
    """
    return query, [values[column] for column in columns]


def build_update(
    table: str,
    updates: dict[str, Any],
    returning: str,
    allowed_fields: Iterable[str],
    where: str = "id = $1",
    where_args: Iterable[Any] = (),
) -> tuple[str, list[Any]] | None:
    """
    Формирует UPDATE ... SET ... RETURNING для частичного обновления.
    Параметры WHERE идут первыми ($1..$k), значения SET после них.
    updated_at выставляется всегда.

    Returns:
        (SQL, параметры) или None, если обновлять нечего
    """
    allowed = set(allowed_fields)
    params = list(where_args)
    set_parts = []
    idx = len(params) + 1

    for key, value in updates.items():
        if key in allowed:
            set_parts.append(f"{key} = ${idx}")
            params.append(value)
            idx += 1

    if not set_parts:
        return None

    set_parts.append("updated_at = NOW()")

    query = f"""
        UPDATE {table}
        SET {", ".join(set_parts)}
        WHERE {where}
        RETURNING {returning}
    """
    return query, params
