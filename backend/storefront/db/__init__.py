import importlib
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from storefront.config import settings

log = logging.getLogger("storefront.db")

DATABASE_URL = settings.DATABASE_URL


def _make_engine(url: str):
    is_sqlite = url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    eng = create_engine(url, future=True, echo=False, connect_args=connect_args)

    if is_sqlite:
        # pysqlite defers BEGIN and ignores foreign keys by default, which breaks
        # SAVEPOINT rollback and ON DELETE CASCADE. Take over both.
        @event.listens_for(eng, "connect")
        def _on_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(eng, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return eng


engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# every module that declares tables; imported before create_all so metadata is complete
MODEL_MODULES = [
    "storefront.models.user",
    "storefront.models.product",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    With reset=True all tables are dropped and recreated (tests, RESET_DB=1).
    Otherwise existing tables are left in place.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database schema")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
