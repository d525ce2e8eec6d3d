"""
Canteen Console — SQLAlchemy async engine and document table

Used only when DOCUMENT_STORE=postgres. The engine is created on first use so
that the other backends never need a database driver.
"""
from datetime import datetime
from functools import lru_cache

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from canteen.core.config import get_settings


class Base(DeclarativeBase):
    pass


class Document(Base):
    """
    [TRANSACTIONAL DATA] — one row per (collection, id); body is the full record.
    """
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    doc_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    body: Mapped[dict] = mapped_column(JSON, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


@lru_cache()
def get_engine() -> AsyncEngine:
    return create_async_engine(get_settings().database_url, pool_pre_ping=True)


def get_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)
