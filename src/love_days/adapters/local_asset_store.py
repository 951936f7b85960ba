"""Local filesystem asset store."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from love_days.domain.media import AssetKind, AssetUpload
from love_days.errors import AssetIOError, AssetTooLarge, ValidationError
from love_days.services.catalog import AssetStore

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024
_PARTITIONS = frozenset(kind.value for kind in AssetKind)


@dataclass
class LocalAssetStore(AssetStore):
    """Stores blobs as ``<root>/<partition>/<random hex><ext>``."""

    root: Path
    max_bytes: int
    url_prefix: str = "/uploads"

    def save(self, kind: AssetKind, upload: AssetUpload) -> str:
        """Persist an upload and return its asset id."""
        content = _read_limited(upload, self.max_bytes)
        asset_id = f"{kind.value}/{uuid.uuid4().hex}{_extension(upload.filename)}"
        path = self._path(asset_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise AssetIOError(f"Failed to store asset {asset_id}: {exc}") from exc
        logger.info("Stored asset", extra={"asset_id": asset_id, "size": len(content)})
        return asset_id

    def delete(self, asset_id: str) -> None:
        """Delete an asset; missing assets are ignored."""
        path = self._path(asset_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise AssetIOError(f"Failed to delete asset {asset_id}: {exc}") from exc

    def initialize(self) -> None:
        """Create every partition directory."""
        for kind in AssetKind:
            (self.root / kind.value).mkdir(parents=True, exist_ok=True)

    def url_for(self, asset_id: str) -> str:
        self._path(asset_id)
        return f"{self.url_prefix.rstrip('/')}/{asset_id}"

    def asset_id_for(self, url: str) -> str | None:
        """Return the asset id behind a stored URL, or None for foreign URLs."""
        prefix = f"{self.url_prefix.rstrip('/')}/"
        if not url or not url.startswith(prefix):
            return None
        asset_id = url[len(prefix) :]
        try:
            self._path(asset_id)
        except ValidationError:
            return None
        return asset_id

    def _path(self, asset_id: str) -> Path:
        parts = PurePosixPath(asset_id).parts
        if (
            len(parts) != 2  # noqa: PLR2004
            or parts[0] not in _PARTITIONS
            or parts[1] in {".", ".."}
            or "\\" in asset_id
        ):
            raise ValidationError(f"Invalid asset id: {asset_id}")
        return self.root / parts[0] / parts[1]


def _read_limited(upload: AssetUpload, max_bytes: int) -> bytes:
    """Read the stream, failing as soon as it grows past ``max_bytes``."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = upload.stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise AssetTooLarge(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def _extension(filename: str | None) -> str:
    if not filename:
        return ""
    suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    if not suffix[1:].isalnum():
        return ""
    return suffix
