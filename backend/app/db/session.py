from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from backend.app.core.config import settings

DATABASE_URL = settings.database_url


def enable_sqlite_write_lock(engine: Engine) -> None:
    """
    SQLite ignore FOR UPDATE : chaque transaction prend le verrou
    d'écriture dès son ouverture (BEGIN IMMEDIATE), sinon deux achats
    concurrents valident sur la même quantité.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        # pysqlite n'émet plus son propre BEGIN différé
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


engine = create_engine(DATABASE_URL, pool_pre_ping=True, echo=settings.database_echo)
if engine.dialect.name == "sqlite":
    enable_sqlite_write_lock(engine)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
