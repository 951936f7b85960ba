"""Song endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from love_days.api.uploads import to_asset_upload
from love_days.services.catalog import SongFields

if TYPE_CHECKING:
    from love_days.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/music", tags=["music"])


@router.get("")
async def list_songs(
    request: Request, owner: str | None = None
) -> list[dict[str, object]]:
    """Return songs, optionally only one owner's."""
    container: AppContainer = request.app.state.container
    songs = container.catalog.list_songs(owner or None)
    return [song.to_document() for song in songs]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_song(  # noqa: PLR0913
    request: Request,
    audio: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    title: str = Form(default=""),
    artist: str = Form(default=""),
    owner: str | None = Form(default=None),
    url: str = Form(default=""),
) -> dict[str, object]:
    """Create a song from an audio upload or an external link."""
    container: AppContainer = request.app.state.container
    song = container.catalog.add_song(
        SongFields(title=title, artist=artist, owner=owner, url=url),
        audio=to_asset_upload(audio),
        cover=to_asset_upload(cover),
    )
    return song.to_document()


@router.delete("/{song_id}")
async def delete_song(song_id: str, request: Request) -> dict[str, bool]:
    """Delete a song with its audio and cover; unknown ids succeed."""
    container: AppContainer = request.app.state.container
    result = container.catalog.delete_song(song_id)
    if not result.cleanup_ok:
        logger.warning(
            "Song deleted but asset cleanup failed",
            extra={"song_id": song_id, "assets": result.failed_assets},
        )
    return {"ok": True}
