"""Opening the database and creating its tables."""

from __future__ import annotations

import os
import posixpath

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine

from voda.config import DBConfig
from voda.persistence.models import Base

DRIVER = "mysql+pymysql"
DEFAULT_SOCKET_DIR = "/cloudsql"


def dev_dsn(cfg: DBConfig) -> URL:
    """TCP connection URL used in development."""
    return URL.create(
        DRIVER,
        username=cfg.user,
        password=cfg.password,
        host=cfg.host,
        port=cfg.port,
        database=cfg.name,
        query={"charset": "utf8"},
    )


def sandbox_dsn(cfg: DBConfig) -> URL:
    """TCP connection URL used in the sandbox."""
    return URL.create(
        DRIVER,
        username=cfg.user,
        password=cfg.password,
        host=cfg.host,
        port=cfg.port,
        database=cfg.name,
    )


def prod_dsn(cfg: DBConfig) -> URL:
    """Unix-socket connection URL; the socket lives in $DB_SOCKET_DIR/<host>."""
    socket_dir = os.environ.get("DB_SOCKET_DIR")
    if socket_dir is None:
        socket_dir = DEFAULT_SOCKET_DIR
    return URL.create(
        DRIVER,
        username=cfg.user,
        password=cfg.password,
        database=cfg.name,
        query={"unix_socket": posixpath.join("/", socket_dir, cfg.host)},
    )


def connect_database(phase: str, cfg: DBConfig) -> Engine:
    """Open an engine for ``phase`` and check that the server answers."""
    builders = {"sandbox": sandbox_dsn, "prod": prod_dsn}
    url = builders.get(phase, dev_dsn)(cfg)
    engine = create_engine(url, pool_pre_ping=True)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception:
        engine.dispose()
        raise
    return engine


def migrate(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    Base.metadata.create_all(engine)