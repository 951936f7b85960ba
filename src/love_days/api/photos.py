"""Gallery photo endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from love_days.api.uploads import to_asset_upload
from love_days.errors import ValidationError

if TYPE_CHECKING:
    from love_days.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.get("")
async def list_photos(request: Request) -> list[dict[str, object]]:
    """Return every photo in upload order."""
    container: AppContainer = request.app.state.container
    return [photo.to_document() for photo in container.catalog.list_photos()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_photo(
    request: Request,
    photo: UploadFile | None = File(default=None),
    caption: str = Form(default=""),
    photo_date: str | None = Form(default=None, alias="photoDate"),
) -> dict[str, object]:
    """Store an uploaded photo and return its record."""
    container: AppContainer = request.app.state.container
    created = container.catalog.add_photo(
        to_asset_upload(photo),
        caption=caption,
        photo_date=_parse_photo_date(photo_date),
    )
    return created.to_document()


@router.delete("/{photo_id}")
async def delete_photo(photo_id: str, request: Request) -> dict[str, bool]:
    """Delete a photo and its image; unknown ids succeed."""
    container: AppContainer = request.app.state.container
    result = container.catalog.delete_photo(photo_id)
    if not result.cleanup_ok:
        logger.warning(
            "Photo deleted but image cleanup failed",
            extra={"photo_id": photo_id, "assets": result.failed_assets},
        )
    return {"ok": True}


def _parse_photo_date(raw: str | None) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise ValidationError(f"Invalid photo date: {raw}") from exc
