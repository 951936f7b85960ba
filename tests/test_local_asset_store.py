"""Tests for the local asset store."""

import io
from pathlib import Path

import pytest

from love_days.adapters.local_asset_store import LocalAssetStore
from love_days.domain.media import AssetKind, AssetUpload
from love_days.errors import AssetTooLarge, ValidationError


def _store(tmp_path: Path, max_bytes: int = 1024) -> LocalAssetStore:
    return LocalAssetStore(root=tmp_path, max_bytes=max_bytes)


def test_save_partitions_by_kind_and_keeps_extension(tmp_path: Path) -> None:
    store = _store(tmp_path)

    asset_id = store.save(
        AssetKind.AUDIO, AssetUpload("My Song.MP3", io.BytesIO(b"audio"))
    )

    partition, name = asset_id.split("/")
    assert partition == "music"
    assert name.endswith(".mp3")
    assert "My Song" not in name
    assert (tmp_path / "music" / name).read_bytes() == b"audio"


def test_save_generates_unique_ids(tmp_path: Path) -> None:
    store = _store(tmp_path)

    first = store.save(AssetKind.PHOTO, AssetUpload("a.jpg", io.BytesIO(b"1")))
    second = store.save(AssetKind.PHOTO, AssetUpload("a.jpg", io.BytesIO(b"2")))

    assert first != second


def test_missing_filename_has_no_extension(tmp_path: Path) -> None:
    store = _store(tmp_path)

    asset_id = store.save(AssetKind.COVER, AssetUpload(None, io.BytesIO(b"x")))

    assert "." not in asset_id.split("/")[1]


def test_oversized_upload_is_rejected_before_writing(tmp_path: Path) -> None:
    store = _store(tmp_path, max_bytes=4)

    with pytest.raises(AssetTooLarge):
        store.save(AssetKind.PHOTO, AssetUpload("big.jpg", io.BytesIO(b"12345")))

    assert not (tmp_path / "photos").exists() or not any(
        (tmp_path / "photos").iterdir()
    )


def test_upload_at_limit_is_accepted(tmp_path: Path) -> None:
    store = _store(tmp_path, max_bytes=4)

    asset_id = store.save(AssetKind.PHOTO, AssetUpload("ok.jpg", io.BytesIO(b"1234")))

    assert (tmp_path / asset_id).read_bytes() == b"1234"


def test_delete_removes_file_and_ignores_missing(tmp_path: Path) -> None:
    store = _store(tmp_path)
    asset_id = store.save(AssetKind.AVATAR, AssetUpload("a.png", io.BytesIO(b"x")))

    store.delete(asset_id)
    store.delete(asset_id)

    assert not (tmp_path / asset_id).exists()


def test_url_round_trips_to_asset_id(tmp_path: Path) -> None:
    store = _store(tmp_path)

    url = store.url_for("photos/abc.jpg")

    assert url == "/uploads/photos/abc.jpg"
    assert store.asset_id_for(url) == "photos/abc.jpg"


@pytest.mark.parametrize(
    "url",
    [
        "",
        "https://example.com/song.mp3",
        "/uploads/../data/settings.json",
        "/uploads/unknown/file.jpg",
        "/uploads/photos/nested/file.jpg",
    ],
)
def test_foreign_urls_have_no_asset_id(tmp_path: Path, url: str) -> None:
    assert _store(tmp_path).asset_id_for(url) is None


def test_delete_rejects_paths_outside_partitions(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        _store(tmp_path).delete("../settings.json")
