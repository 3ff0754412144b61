import uuid
import structlog
from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.db.session import get_db
from storefront.services.cart_storage import SqlCartStorage
from storefront.services.cart_store import CartStore

logger = structlog.get_logger()


def _is_valid_session_id(value: str | None) -> bool:
    if not value:
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def get_cart_session_id(request: Request, response: Response) -> str:
    """Return the browser's cart session id, issuing a new cookie when missing."""
    session_id = request.cookies.get(settings.CART_SESSION_COOKIE)
    if _is_valid_session_id(session_id):
        return session_id

    session_id = uuid.uuid4().hex
    response.set_cookie(
        key=settings.CART_SESSION_COOKIE,
        value=session_id,
        max_age=settings.CART_SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    logger.info("cart_session_created", session_id=session_id)
    return session_id


def cart_storage_key(session_id: str) -> str:
    return f"{settings.CART_STORAGE_KEY}:{session_id}"


def get_cart_store(
    session_id: str = Depends(get_cart_session_id),
    db: Session = Depends(get_db),
) -> CartStore:
    """Rehydrate the session's cart from its persisted slot for this request."""
    return CartStore(SqlCartStorage(db, cart_storage_key(session_id)))
