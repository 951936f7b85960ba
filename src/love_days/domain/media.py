"""Domain models for photos, songs and stored assets."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import BinaryIO


class Owner(StrEnum):
    """Partners a song can belong to."""

    TUYEN = "tuyen"
    TRANG = "trang"


class AssetKind(StrEnum):
    """Asset kinds; each value is the partition directory it is stored in."""

    PHOTO = "photos"
    AUDIO = "music"
    COVER = "covers"
    AVATAR = "avatars"
    BACKGROUND = "backgrounds"


@dataclass(frozen=True)
class AssetUpload:
    """An incoming file: original name plus a readable binary stream."""

    filename: str | None
    stream: BinaryIO


@dataclass(frozen=True)
class Photo:
    """A gallery photo backed by one stored image."""

    id: str
    url: str
    caption: str
    photo_date: date
    created_at: datetime

    def to_document(self) -> dict[str, object]:
        return {
            "id": self.id,
            "url": self.url,
            "caption": self.caption,
            "photoDate": self.photo_date.isoformat(),
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: dict[str, object]) -> "Photo":
        return cls(
            id=str(doc["id"]),
            url=str(doc["url"]),
            caption=str(doc.get("caption") or ""),
            # Older documents store a full ISO timestamp here.
            photo_date=date.fromisoformat(str(doc["photoDate"])[:10]),
            created_at=datetime.fromisoformat(str(doc["createdAt"])),
        )


@dataclass(frozen=True)
class Song:
    """A song that is either a stored audio file or an external link."""

    id: str
    title: str
    owner: Owner
    created_at: datetime
    artist: str = ""
    url: str = ""
    file_url: str = ""
    cover_art_url: str = ""

    @property
    def is_playable(self) -> bool:
        """True when the song has stored audio and can play in-app."""
        return bool(self.file_url)

    @property
    def is_link_only(self) -> bool:
        return not self.file_url and bool(self.url)

    def to_document(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "owner": self.owner.value,
            "url": self.url,
            "fileUrl": self.file_url,
            "coverArtUrl": self.cover_art_url,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: dict[str, object]) -> "Song":
        return cls(
            id=str(doc["id"]),
            title=str(doc["title"]),
            owner=Owner(str(doc["owner"])),
            created_at=datetime.fromisoformat(str(doc["createdAt"])),
            artist=str(doc.get("artist") or ""),
            url=str(doc.get("url") or ""),
            file_url=str(doc.get("fileUrl") or ""),
            cover_art_url=str(doc.get("coverArtUrl") or ""),
        )


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a record delete with best-effort asset cleanup."""

    found: bool
    failed_assets: tuple[str, ...] = ()

    @property
    def cleanup_ok(self) -> bool:
        return not self.failed_assets
