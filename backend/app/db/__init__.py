from .core import connect, cursor, get_conn, store_errors
from .deps import get_conn_factory, get_settings

__all__ = [
    "get_conn",
    "connect",
    "cursor",
    "store_errors",
    "get_conn_factory",
    "get_settings",
]
