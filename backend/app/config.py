import os
from dataclasses import dataclass, field
from urllib.parse import unquote, urlparse

__all__ = [
    "ConfigError",
    "DbSettings",
    "AppSettings",
    "DEFAULT_DB_URL",
]

DEFAULT_DB_URL = "mysql://localhost:3306/PlantDB"
DEFAULT_TEST_DB_URL = "mysql://localhost:3306/PlantDB_test"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)


class ConfigError(ValueError):
    pass


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer (got {raw!r})") from e


def _flag_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean flag (got {raw!r})")


@dataclass(frozen=True)
class DbSettings:
    """Connection parameters for the plant store.

    Built once at startup and handed to the connection provider. Nothing here
    carries a secret default: an unset PLANTDB_PASS means an empty password.
    """

    host: str = "localhost"
    port: int = 3306
    database: str = "PlantDB"
    user: str = "root"
    password: str = ""
    connect_timeout: int = 5

    @classmethod
    def from_url(cls, url: str, *, user: str = "root", password: str = "", connect_timeout: int = 5) -> "DbSettings":
        """Parse ``mysql://[user[:pass]@]host[:port]/database``.

        Credentials embedded in the URL take precedence over ``user``/``password``.
        """
        parsed = urlparse(url.strip())
        if parsed.scheme not in ("mysql", "mysql+pymysql"):
            raise ConfigError(f"Unsupported store URL scheme: {parsed.scheme or url!r}")
        database = parsed.path.lstrip("/")
        if not parsed.hostname or not database:
            raise ConfigError(f"Store URL must name a host and a database: {url!r}")
        try:
            port = parsed.port or 3306
        except ValueError as e:
            raise ConfigError(f"Invalid port in store URL: {url!r}") from e
        return cls(
            host=parsed.hostname,
            port=port,
            database=database,
            user=unquote(parsed.username) if parsed.username else user,
            password=unquote(parsed.password) if parsed.password else password,
            connect_timeout=connect_timeout,
        )

    @classmethod
    def from_env(cls) -> "DbSettings":
        # Auto-isolate tests: when TEST_MODE=1 and PLANTDB_URL is not set,
        # point at the PlantDB_test database.
        test_mode = os.getenv("TEST_MODE") == "1"
        url = os.getenv("PLANTDB_URL") or (DEFAULT_TEST_DB_URL if test_mode else DEFAULT_DB_URL)
        return cls.from_url(
            url,
            user=os.getenv("PLANTDB_USER", "root"),
            password=os.getenv("PLANTDB_PASS", ""),
            connect_timeout=_int_env("PLANTDB_CONNECT_TIMEOUT", 5),
        )


@dataclass(frozen=True)
class AppSettings:
    db: DbSettings = field(default_factory=DbSettings)
    atomic_upsert: bool = True
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"
    test_mode: bool = False

    @classmethod
    def from_env(cls) -> "AppSettings":
        raw_origins = os.getenv("PLANT_CORS_ORIGINS")
        if raw_origins:
            origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())
        else:
            origins = DEFAULT_CORS_ORIGINS
        return cls(
            db=DbSettings.from_env(),
            atomic_upsert=_flag_env("PLANT_ATOMIC_UPSERT", True),
            cors_origins=origins,
            log_level=os.getenv("PLANT_LOG_LEVEL", "INFO").upper(),
            test_mode=os.getenv("TEST_MODE") == "1",
        )
