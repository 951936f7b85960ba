"""Helpers for turning multipart uploads into domain uploads."""

from fastapi import UploadFile

from love_days.domain.media import AssetUpload


def to_asset_upload(file: UploadFile | None) -> AssetUpload | None:
    """Return None for a missing part or an empty file input."""
    if file is None or not file.filename:
        return None
    return AssetUpload(filename=file.filename, stream=file.file)
