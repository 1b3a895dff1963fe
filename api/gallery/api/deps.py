import uuid
from datetime import date

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.security import decode_token, is_admin_subject
from gallery.db.session import get_session
from gallery.schema.pagination import ListRequest

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncSession:
    async for session in get_session():
        yield session


async def require_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Gate mutating routes on a valid bearer token, returning its subject."""
    token = credentials.credentials if credentials else None
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    payload = decode_token(token)
    if not payload or payload.get("type") != "access" or not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    subject = str(payload["sub"])
    if not is_admin_subject(subject):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to modify gallery data")
    return subject


def list_params(
    page: int | None = Query(default=None, description="Zero-based page number"),
    limit: int | None = Query(default=None, description="Rows per page"),
    sort_field: str | None = Query(default=None, alias="sortField"),
    sort_direction: str | None = Query(default=None, alias="sortDirection"),
) -> ListRequest:
    """Collect paging and sort query parameters; filters are added per route."""
    return ListRequest(page=page, limit=limit, sort_field=sort_field, sort_direction=sort_direction)


def image_list_request(
    request: ListRequest = Depends(list_params),
    thumbnail_url: str | None = Query(default=None, alias="thumbnailUrl"),
    image_url: str | None = Query(default=None, alias="imageUrl"),
    title: str | None = Query(default=None),
    description: str | None = Query(default=None),
    location: str | None = Query(default=None),
    capture_date: date | None = Query(default=None, alias="captureDate"),
) -> ListRequest:
    request.filters = {
        "thumbnailUrl": thumbnail_url,
        "imageUrl": image_url,
        "title": title,
        "description": description,
        "location": location,
        "captureDate": capture_date,
    }
    return request


def group_list_request(
    request: ListRequest = Depends(list_params),
    thumbnail_url: str | None = Query(default=None, alias="thumbnailUrl"),
    image_url: str | None = Query(default=None, alias="imageUrl"),
    title: str | None = Query(default=None),
    description: str | None = Query(default=None),
) -> ListRequest:
    request.filters = {
        "thumbnailUrl": thumbnail_url,
        "imageUrl": image_url,
        "title": title,
        "description": description,
    }
    return request


def tag_list_request(
    request: ListRequest = Depends(list_params),
    name: str | None = Query(default=None),
    description: str | None = Query(default=None),
) -> ListRequest:
    request.filters = {"name": name, "description": description}
    return request


def join_list_request(left: str, right: str):
    """Build a list dependency filtering a join table on its two foreign keys."""

    def dependency(
        request: ListRequest = Depends(list_params),
        left_id: uuid.UUID | None = Query(default=None, alias=left),
        right_id: uuid.UUID | None = Query(default=None, alias=right),
    ) -> ListRequest:
        request.filters = {left: left_id, right: right_id}
        return request

    return dependency
