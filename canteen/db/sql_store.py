"""
Canteen Console — PostgreSQL-backed document repository

Each call runs in its own short transaction. There is no cross-record
transaction: a multi-record flow can leave earlier writes committed when a
later one fails.
"""
import logging

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from canteen.core.exceptions import PersistenceError
from canteen.db.database import Base, Document, get_sessionmaker
from canteen.db.repository import DocumentRepository, with_id

logger = logging.getLogger(__name__)

# asyncpg surfaces refused connections as plain OSError
_DB_ERRORS = (SQLAlchemyError, OSError)


class SqlDocumentRepository(DocumentRepository):
    name = "postgres"

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._sessions = get_sessionmaker(engine)

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def get_all(self, collection: str) -> list[dict]:
        try:
            async with self._sessions() as db:
                result = await db.execute(
                    select(Document).where(Document.collection == collection).order_by(Document.doc_id)
                )
                return [with_id(doc.doc_id, dict(doc.body)) for doc in result.scalars().all()]
        except _DB_ERRORS as exc:
            raise PersistenceError(f"Could not read '{collection}': {exc}") from exc

    async def set(self, collection: str, doc_id: str, record: dict) -> None:
        try:
            async with self._sessions() as db:
                await db.merge(Document(collection=collection, doc_id=doc_id, body=record))
                await db.commit()
            logger.debug("Upserted %s/%s", collection, doc_id)
        except _DB_ERRORS as exc:
            raise PersistenceError(f"Could not write '{collection}/{doc_id}': {exc}") from exc

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            async with self._sessions() as db:
                await db.execute(
                    delete(Document).where(Document.collection == collection, Document.doc_id == doc_id)
                )
                await db.commit()
        except _DB_ERRORS as exc:
            raise PersistenceError(f"Could not delete '{collection}/{doc_id}': {exc}") from exc

    async def ping(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _DB_ERRORS as exc:
            raise PersistenceError(f"PostgreSQL unreachable: {exc}") from exc

    async def close(self) -> None:
        await self._engine.dispose()
