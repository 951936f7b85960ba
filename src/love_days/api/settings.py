"""Site settings endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, UploadFile

from love_days.api.models import SettingsUpdate
from love_days.api.uploads import to_asset_upload
from love_days.domain.settings import settings_to_document

if TYPE_CHECKING:
    from love_days.containers import AppContainer

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("")
async def get_settings(request: Request) -> dict[str, object]:
    """Return the current settings."""
    container: AppContainer = request.app.state.container
    return settings_to_document(container.catalog.get_settings())


@router.put("")
async def update_settings(
    update: SettingsUpdate, request: Request
) -> dict[str, object]:
    """Merge the given fields into the stored settings."""
    container: AppContainer = request.app.state.container
    updated = container.catalog.update_settings(update.changes())
    return settings_to_document(updated)


@router.post("/avatar")
async def upload_avatar(
    request: Request,
    avatar: UploadFile | None = File(default=None),
    which: str = Form(default="1"),
) -> dict[str, object]:
    """Replace one partner's avatar."""
    container: AppContainer = request.app.state.container
    updated = container.catalog.set_avatar(which, to_asset_upload(avatar))
    return settings_to_document(updated)


@router.post("/background")
async def upload_background(
    request: Request,
    background: UploadFile | None = File(default=None),
) -> dict[str, object]:
    """Switch the site background to an uploaded image."""
    container: AppContainer = request.app.state.container
    updated = container.catalog.set_background(to_asset_upload(background))
    return settings_to_document(updated)
