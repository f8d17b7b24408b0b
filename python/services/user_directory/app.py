"""User Directory: FastAPI application for managing users in memory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_directory.config import Settings, get_settings
from user_directory.listing import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    filter_by_country,
    paginate,
    parse_positive_int,
)
from user_directory.logging_config import setup_logging
from userstore.models import User, UserBase
from userstore.store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]
COLLECTION_METHODS = ["GET", "POST"]
ITEM_METHODS = ["PUT", "DELETE"]


def new_id() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_id_factory(request: Request) -> Callable[[], str]:
    return request.app.state.id_factory


def get_clock(request: Request) -> Callable[[], datetime]:
    return request.app.state.clock


def require_user_id(user_id: str) -> str:
    if not user_id or user_id == "/":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User ID required")
    return user_id


async def decode_user(request: Request) -> UserBase:
    """Decode the request body into the client-writable user fields."""
    body = await request.body()
    try:
        return UserBase.model_validate_json(body)
    except ValidationError as exc:
        logger.warning("Error decoding user: %s", exc.errors(include_url=False, include_input=False))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid input") from exc


@router.api_route("/health", methods=ALL_METHODS, response_class=PlainTextResponse)
def health():
    return "OK"


@router.get("/users", response_model=list[User])
def list_users(
    page: str | None = None,
    page_size: str | None = Query(None, alias="pageSize"),
    country: str = "",
    store: UserStore = Depends(get_store),
):
    page_number = parse_positive_int(page, DEFAULT_PAGE)
    size = parse_positive_int(page_size, DEFAULT_PAGE_SIZE)
    users = filter_by_country(store.list_users(), country)
    return paginate(users, page_number, size)


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserBase = Depends(decode_user),
    store: UserStore = Depends(get_store),
    id_factory: Callable[[], str] = Depends(get_id_factory),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    now = clock()
    user = User(**payload.model_dump(), id=id_factory(), created_at=now, updated_at=now)
    store.add_user(user)
    logger.info("User added: %s", user.id)
    return user


@router.put("/users/{user_id:path}", response_model=User)
def update_user(
    user_id: str = Depends(require_user_id),
    payload: UserBase = Depends(decode_user),
    store: UserStore = Depends(get_store),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    existing = store.get_user(user_id)
    if existing is None:
        logger.info("User not found: %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user = User(
        **payload.model_dump(),
        id=existing.id,
        created_at=existing.created_at,
        updated_at=clock(),
    )
    store.update_user(user)
    logger.info("User updated: %s", user.id)
    return user


@router.delete("/users/{user_id:path}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(
    user_id: str = Depends(require_user_id),
    store: UserStore = Depends(get_store),
):
    if store.get_user(user_id) is None:
        logger.info("User not found: %s", user_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    store.delete_user(user_id)
    logger.info("User deleted: %s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)



def method_not_allowed(allowed: list[str]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
        headers={"Allow": ", ".join(allowed)},
    )


@router.api_route("/users", methods=[m for m in ALL_METHODS if m not in COLLECTION_METHODS])
def users_collection_fallback():
    raise method_not_allowed(COLLECTION_METHODS)


# Registered after PUT and DELETE; the id is checked before the method.
@router.api_route("/users/{user_id:path}", methods=[m for m in ALL_METHODS if m not in ITEM_METHODS])
def users_item_fallback(user_id: str = Depends(require_user_id)):
    raise method_not_allowed(ITEM_METHODS)


# Messages for errors raised by routing rather than by the handlers above.
_ROUTING_MESSAGES = {
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Render every HTTP error as a short plain-text message."""
    message = _ROUTING_MESSAGES.get(exc.status_code, str(exc.detail))
    return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)


def create_app(
    store: UserStore | None = None,
    *,
    settings: Settings | None = None,
    id_factory: Callable[[], str] = new_id,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    """Build the application around an explicitly owned store.

    Each call gets its own store unless one is passed in, so tests can
    start from an empty directory. Logging is set up at startup, including
    under `uvicorn --factory user_directory.app:create_app`.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(settings)
        logger.info("%s v%s started (environment=%s)", settings.app_name, settings.app_version, settings.environment)
        yield
        logger.info("%s shutting down", settings.app_name)

    app = FastAPI(title="User Directory", version=settings.app_version, lifespan=lifespan)
    app.state.store = store if store is not None else UserStore()
    app.state.id_factory = id_factory
    app.state.clock = clock

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.include_router(router)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
