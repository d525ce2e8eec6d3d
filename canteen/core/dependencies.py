"""
Canteen Console — Backend wiring and FastAPI dependencies

All per-process state (repository, notifier, cart, console, inventory) lives
on app.state and is handed to routes explicitly through Depends().
"""
from fastapi import FastAPI, Request

from canteen.cart.store import CartStore
from canteen.core.config import Settings
from canteen.core.notifier import HttpNotifier, LogNotifier, Notifier, RedisNotifier
from canteen.core.redis_client import get_redis
from canteen.db.database import get_engine
from canteen.db.redis_store import RedisDocumentRepository
from canteen.db.repository import DocumentRepository, InMemoryDocumentRepository
from canteen.db.sql_store import SqlDocumentRepository
from canteen.ordering.console import OrderConsole
from canteen.stock.inventory import InventoryBook


def build_repository(settings: Settings) -> DocumentRepository:
    backend = settings.DOCUMENT_STORE.lower()
    if backend == "memory":
        return InMemoryDocumentRepository()
    if backend == "redis":
        return RedisDocumentRepository(get_redis(), key_prefix=settings.REDIS_KEY_PREFIX)
    if backend == "postgres":
        return SqlDocumentRepository(get_engine())
    raise ValueError(f"Unknown DOCUMENT_STORE '{settings.DOCUMENT_STORE}' (memory, redis, postgres).")


def build_notifier(settings: Settings) -> Notifier:
    kind = settings.NOTIFIER.lower()
    if kind == "log":
        return LogNotifier()
    if kind == "redis":
        return RedisNotifier(get_redis(), settings.NOTIFICATION_CHANNEL)
    if kind == "http":
        return HttpNotifier(settings.NOTIFICATION_HUB_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
    raise ValueError(f"Unknown NOTIFIER '{settings.NOTIFIER}' (log, redis, http).")


def attach_state(app: FastAPI, repository: DocumentRepository, notifier: Notifier) -> None:
    app.state.repository = repository
    app.state.notifier = notifier
    app.state.cart = CartStore()
    app.state.console = OrderConsole(repository, notifier)
    app.state.inventory = InventoryBook(repository, notifier)


def get_repository(request: Request) -> DocumentRepository:
    return request.app.state.repository


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_cart(request: Request) -> CartStore:
    return request.app.state.cart


def get_console(request: Request) -> OrderConsole:
    return request.app.state.console


def get_inventory(request: Request) -> InventoryBook:
    return request.app.state.inventory
