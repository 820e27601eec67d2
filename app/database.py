import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import get_settings
from app.errors import StorageError

logger = logging.getLogger(__name__)

settings = get_settings()

# SQLite needs check_same_thread=False for FastAPI
connect_args = {}
if settings.sqlalchemy_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.sqlalchemy_url,
    connect_args=connect_args,
    pool_pre_ping=True,
    echo=False,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    One-time schema step, called from the app lifespan before serving traffic.
    Alembic revisions are canonical; create_all is only for local/dev databases.
    """
    import app.models  # noqa: F401 - register tables on Base.metadata

    if not get_settings().auto_create_schema:
        logger.info("Schema auto-create disabled; expecting `alembic upgrade head`")
        return
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database schema ready")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    All-or-nothing unit of work: commit on success, roll back on any error.
    SQLAlchemy failures surface as StorageError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Storage operation failed")
        raise StorageError("Storage operation failed") from e
    except Exception:
        db.rollback()
        raise
