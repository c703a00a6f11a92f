from dataclasses import dataclass
from typing import Any, Mapping

from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from hrapp.core.config import get_settings

settings = get_settings()


def make_engine(url: str) -> Engine:
    # sqlite connections are shared across FastAPI's worker threads
    return create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
    )


engine = make_engine(settings.sqlalchemy_url)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

class Base(DeclarativeBase):
    pass


@dataclass(frozen=True)
class RunResult:
    inserted_id: int | None
    rowcount: int


class RowStore:
    """Plain row queries over a SQLAlchemy session.

    Records come back as dicts keyed by column name; nothing is mapped to
    ORM objects here.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, query: str, params: Mapping[str, Any] | None = None) -> dict | None:
        row = self.session.execute(text(query), params or {}).mappings().first()
        return dict(row) if row is not None else None

    def all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict]:
        rows = self.session.execute(text(query), params or {}).mappings().all()
        return [dict(r) for r in rows]

    def run(self, query: str, params: Mapping[str, Any] | None = None) -> RunResult:
        try:
            result = self.session.execute(text(query), params or {})
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return RunResult(inserted_id=result.lastrowid, rowcount=result.rowcount)


def create_tables(bind: Engine) -> None:
    # registers the tables on Base.metadata
    import hrapp.models  # noqa: F401

    Base.metadata.create_all(bind=bind)


# FastAPI dependencies
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RowStore:
    return RowStore(db)
