from __future__ import annotations

from functools import lru_cache, partial
from typing import Callable

import pymysql
from fastapi import Depends

from ..config import AppSettings
from .core import get_conn


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Application settings, read from the environment once per process."""
    return AppSettings.from_env()


def get_conn_factory(settings: AppSettings = Depends(get_settings)) -> Callable[[], pymysql.connections.Connection]:
    """
    FastAPI dependency that provides a factory function to obtain a PyMySQL
    connection on demand. This is threadpool-friendly and easy to override in
    tests to supply a fake connection.
    """
    return partial(get_conn, settings.db)
