"""
Canteen Console — FastAPI entrypoint
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from canteen.core.config import get_settings
from canteen.core.dependencies import attach_state, build_notifier, build_repository
from canteen.core.redis_client import close_redis
from canteen.db.sql_store import SqlDocumentRepository
from canteen.api import cart, health, menu, orders, stock

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository = build_repository(settings)
    if isinstance(repository, SqlDocumentRepository):
        await repository.create_schema()
    attach_state(app, repository, build_notifier(settings))
    logger.info("%s using %s document store", settings.SERVICE_NAME, repository.name)
    yield
    await repository.close()
    await close_redis()


app = FastAPI(
    title="Canteen Console",
    description="Order queue console and cart-to-stock reconciliation over a document store.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_credentials=True,
                   allow_methods=["*"], allow_headers=["*"])

if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

app.include_router(menu.router)
app.include_router(cart.router)
app.include_router(stock.router)
app.include_router(orders.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("canteen.main:app", host=settings.HOST, port=settings.PORT)
