"""Media catalog: records and their stored assets."""

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Protocol

from love_days.domain.media import (
    AssetKind,
    AssetUpload,
    DeleteResult,
    Owner,
    Photo,
    Song,
)
from love_days.domain.settings import (
    DEFAULT_SETTINGS,
    SiteSettings,
    merge_settings,
    settings_from_document,
    settings_to_document,
)
from love_days.errors import AssetIOError, StoreCorruption, ValidationError

logger = logging.getLogger(__name__)

Document = dict[str, object] | list[dict[str, object]]


class Collection(StrEnum):
    """Named collections persisted by the record store."""

    SETTINGS = "settings"
    PHOTOS = "photos"
    SONGS = "songs"


def default_document(collection: Collection) -> Document:
    """Return the document a collection starts with when nothing is stored."""
    if collection is Collection.SETTINGS:
        return settings_to_document(DEFAULT_SETTINGS)
    return []


class RecordStore(Protocol):
    """Whole-collection persistence interface."""

    def get(self, collection: Collection) -> Document:
        """Return the full collection document."""

    def put(self, collection: Collection, value: Document) -> None:
        """Overwrite the full collection document."""


class AssetStore(Protocol):
    """Binary asset persistence interface."""

    def save(self, kind: AssetKind, upload: AssetUpload) -> str:
        """Store an upload and return its asset id."""

    def delete(self, asset_id: str) -> None:
        """Delete an asset; unknown ids are a no-op."""

    def url_for(self, asset_id: str) -> str:
        """Return the public URL for an asset id."""

    def asset_id_for(self, url: str) -> str | None:
        """Return the asset id behind a public URL, if it is one of ours."""


@dataclass(frozen=True)
class SongFields:
    """Text fields submitted with a new song."""

    title: str
    artist: str = ""
    owner: str | None = None
    url: str = ""


@dataclass
class MediaCatalog:
    """Record-level operations with asset lifecycle tied to the record.

    Creates store the asset before appending the record; deletes remove the
    record even when asset cleanup fails. Neither direction rolls back, so a
    failed write can leave an orphaned asset behind.
    """

    records: RecordStore
    assets: AssetStore
    default_owner: Owner = Owner.TUYEN

    # Settings

    def get_settings(self) -> SiteSettings:
        try:
            return settings_from_document(self._settings_document())
        except ValidationError as exc:
            raise StoreCorruption(Collection.SETTINGS.value, str(exc)) from exc

    def update_settings(self, changes: dict[str, object]) -> SiteSettings:
        """Merge partial changes into the stored settings."""
        updated = merge_settings(self.get_settings(), changes)
        self._save_settings(updated)
        return updated

    def set_avatar(
        self, which: str | None, upload: AssetUpload | None
    ) -> SiteSettings:
        """Store a new avatar for partner "1" or "2"."""
        slot = which or "1"
        if slot not in {"1", "2"}:
            raise ValidationError("Avatar slot must be '1' or '2'")
        if upload is None:
            raise ValidationError("No file")
        url = self.assets.url_for(self.assets.save(AssetKind.AVATAR, upload))
        current = self.get_settings()
        field_name = f"avatar{slot}_url"
        previous = getattr(current, field_name)
        updated = merge_settings(current, {field_name: url})
        self._save_settings(updated)
        self._discard(previous)
        return updated

    def set_background(self, upload: AssetUpload | None) -> SiteSettings:
        """Store a background image and switch the theme to it."""
        if upload is None:
            raise ValidationError("No file")
        url = self.assets.url_for(self.assets.save(AssetKind.BACKGROUND, upload))
        current = self.get_settings()
        updated = merge_settings(
            current, {"background_type": "image", "background_url": url}
        )
        self._save_settings(updated)
        self._discard(current.background_url)
        return updated

    # Photos

    def list_photos(self) -> list[Photo]:
        return [Photo.from_document(doc) for doc in self._list(Collection.PHOTOS)]

    def add_photo(
        self,
        upload: AssetUpload | None,
        caption: str | None = None,
        photo_date: date | None = None,
    ) -> Photo:
        """Store the image, then append and persist its record."""
        if upload is None:
            raise ValidationError("No file")
        url = self.assets.url_for(self.assets.save(AssetKind.PHOTO, upload))
        now = datetime.now(tz=UTC)
        photo = Photo(
            id=str(uuid.uuid4()),
            url=url,
            caption=caption or "",
            photo_date=photo_date or now.date(),
            created_at=now,
        )
        documents = self._list(Collection.PHOTOS)
        documents.append(photo.to_document())
        self._persist_new(Collection.PHOTOS, documents, [url])
        return photo

    def delete_photo(self, photo_id: str) -> DeleteResult:
        """Remove a photo record and its image; unknown ids are a no-op."""
        return self._delete(Collection.PHOTOS, photo_id, ("url",))

    # Songs

    def list_songs(self, owner: Owner | str | None = None) -> list[Song]:
        """Return songs in insertion order, optionally for one owner."""
        songs = [Song.from_document(doc) for doc in self._list(Collection.SONGS)]
        if owner is None:
            return songs
        return [song for song in songs if song.owner == owner]

    def add_song(
        self,
        fields: SongFields,
        audio: AssetUpload | None = None,
        cover: AssetUpload | None = None,
    ) -> Song:
        """Store audio and cover, then append and persist the song record."""
        title = fields.title.strip()
        if not title:
            raise ValidationError("Title is required")
        link = fields.url.strip()
        if audio is None and not link:
            raise ValidationError("Either an audio file or a link is required")
        owner = _parse_owner(fields.owner) if fields.owner else self.default_owner

        stored: list[str] = []
        file_url = ""
        cover_art_url = ""
        try:
            if audio is not None:
                file_url = self.assets.url_for(
                    self.assets.save(AssetKind.AUDIO, audio)
                )
                stored.append(file_url)
            if cover is not None:
                cover_art_url = self.assets.url_for(
                    self.assets.save(AssetKind.COVER, cover)
                )
                stored.append(cover_art_url)
        except (AssetIOError, ValidationError):
            for url in stored:
                self._discard(url)
            raise

        song = Song(
            id=str(uuid.uuid4()),
            title=title,
            owner=owner,
            created_at=datetime.now(tz=UTC),
            artist=fields.artist.strip(),
            url=link,
            file_url=file_url,
            cover_art_url=cover_art_url,
        )
        documents = self._list(Collection.SONGS)
        documents.append(song.to_document())
        self._persist_new(Collection.SONGS, documents, stored)
        return song

    def delete_song(self, song_id: str) -> DeleteResult:
        """Remove a song record with its audio and cover; unknown ids are a no-op."""
        return self._delete(Collection.SONGS, song_id, ("fileUrl", "coverArtUrl"))

    # Internals

    def _settings_document(self) -> dict[str, object]:
        doc = self.records.get(Collection.SETTINGS)
        if not isinstance(doc, dict):
            raise TypeError("Settings collection must be a document")
        return doc

    def _save_settings(self, settings: SiteSettings) -> None:
        # Keys this version does not know about survive the rewrite.
        doc = self._settings_document()
        doc.update(settings_to_document(settings))
        self.records.put(Collection.SETTINGS, doc)

    def _list(self, collection: Collection) -> list[dict[str, object]]:
        documents = self.records.get(collection)
        if not isinstance(documents, list):
            raise TypeError(f"{collection.value} collection must be a list")
        return documents

    def _persist_new(
        self,
        collection: Collection,
        documents: list[dict[str, object]],
        asset_urls: list[str],
    ) -> None:
        try:
            self.records.put(collection, documents)
        except Exception:
            logger.exception(
                "Record write failed after storing assets; assets are orphaned",
                extra={"collection": collection.value, "asset_urls": asset_urls},
            )
            raise

    def _delete(
        self, collection: Collection, record_id: str, url_keys: tuple[str, ...]
    ) -> DeleteResult:
        documents = self._list(collection)
        target = next((doc for doc in documents if doc.get("id") == record_id), None)
        if target is None:
            return DeleteResult(found=False)
        failed = [
            url
            for url in (str(target.get(key) or "") for key in url_keys)
            if url and not self._discard(url)
        ]
        self.records.put(
            collection, [doc for doc in documents if doc.get("id") != record_id]
        )
        return DeleteResult(found=True, failed_assets=tuple(failed))

    def _discard(self, url: str) -> bool:
        """Best-effort asset removal; returns False when deletion failed."""
        if not url:
            return True
        asset_id = self.assets.asset_id_for(url)
        if asset_id is None:
            return True
        try:
            self.assets.delete(asset_id)
        except AssetIOError:
            logger.exception("Failed to delete asset", extra={"asset_id": asset_id})
            return False
        return True


def _parse_owner(raw: Owner | str) -> Owner:
    try:
        return Owner(raw)
    except ValueError as exc:
        allowed = ", ".join(owner.value for owner in Owner)
        raise ValidationError(f"Owner must be one of: {allowed}") from exc
