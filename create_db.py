#!/usr/bin/env python3
# create_db.py
"""
Создаёт базу данных (если её нет) и применяет migrations/init.sql.
"""

import asyncio
import sys

import asyncpg

from src.config import settings
from src.common.logger import setup_logging, log_info, log_error
from src.common.constants import TypeMsg
from src.infra.database import init_db, close_db


async def ensure_database() -> bool:
    """
    Создаёт БД settings.database.DB_NAME через служебную БД postgres.

    Returns:
        True если БД была создана
    """
    db_name = settings.database.DB_NAME

    # Connect to default postgres DB to create new DB
    sys_conn = await asyncpg.connect(
        user=settings.database.DB_USER,
        password=settings.database.DB_PASSWORD,
        host=settings.database.DB_HOST,
        port=settings.database.DB_PORT,
        database="postgres",
    )
    try:
        exists = await sys_conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
        if exists:
            await log_info(f"База данных {db_name} уже существует", type_msg=TypeMsg.INFO)
            return False

        await log_info(f"Создание базы данных {db_name}...", type_msg=TypeMsg.INFO)
        # CREATE DATABASE не принимает параметры, имя экранируется как идентификатор
        quoted = '"' + db_name.replace('"', '""') + '"'
        await sys_conn.execute(f"CREATE DATABASE {quoted}")
        await log_info(f"База данных {db_name} создана", type_msg=TypeMsg.INFO)
        return True
    finally:
        await sys_conn.close()


async def create_db() -> None:
    setup_logging()
    try:
        await ensure_database()
        await init_db(apply_schema=True)
    except (OSError, asyncpg.PostgresError) as e:
        await log_error(f"Не удалось подготовить БД: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(create_db())
