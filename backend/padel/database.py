import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from padel.errors import PersistenceFailure

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./padel.db")

_is_sqlite = DATABASE_URL.startswith("sqlite")
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
_echo = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

if _is_sqlite and ":memory:" not in DATABASE_URL:
    db_path = DATABASE_URL.replace("sqlite:///", "", 1)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

engine: Engine = create_engine(
    DATABASE_URL,
    echo=_echo,
    connect_args=_connect_args,
)


def get_session() -> Generator[Session, None, None]:
    """Get database session"""
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    All-or-nothing unit of work on ``session``.

    Commits when the block exits cleanly. Any exception rolls the session back
    and propagates; SQLAlchemy errors are re-raised as PersistenceFailure.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Transaction rolled back: %s", exc)
        raise PersistenceFailure(str(exc)) from exc
    except Exception:
        session.rollback()
        raise


def init_db() -> None:
    """Initialize database - create all tables"""
    # Import all models to ensure they're registered with SQLModel metadata
    from padel.models.championship import Championship  # noqa: F401
    from padel.models.court import Court  # noqa: F401
    from padel.models.match import Match  # noqa: F401
    from padel.models.match_set import MatchSet  # noqa: F401
    from padel.models.standing import Standing  # noqa: F401
    from padel.models.team import Team  # noqa: F401

    SQLModel.metadata.create_all(engine)
