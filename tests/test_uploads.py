# tests/test_uploads.py
"""Tests for photo upload handling"""
import asyncio
import io
import os

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from roadside_dispatch.uploads import discard_photo, save_photo, unique_filename


def _upload(content: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_missing_photo_resolves_to_none(tmp_path):
    assert asyncio.run(save_photo(None, directory=str(tmp_path))) is None


def test_saves_image(tmp_path):
    ref = asyncio.run(save_photo(_upload(b"jpeg-bytes", "Car.JPG", "image/jpeg"), directory=str(tmp_path)))
    assert ref.startswith("/uploads/photo-")
    assert ref.endswith(".jpg")
    assert (tmp_path / os.path.basename(ref)).read_bytes() == b"jpeg-bytes"


def test_rejects_non_image(tmp_path):
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(save_photo(_upload(b"%PDF", "report.pdf", "application/pdf"), directory=str(tmp_path)))
    assert excinfo.value.status_code == 400
    assert list(tmp_path.iterdir()) == []


def test_rejects_oversized_image(tmp_path):
    upload = _upload(b"x" * 2048, "big.png", "image/png")
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(save_photo(upload, directory=str(tmp_path), max_bytes=1024))
    assert excinfo.value.status_code == 413
    assert list(tmp_path.iterdir()) == []


def test_unique_filenames():
    first = unique_filename("photo", "a.png")
    second = unique_filename("photo", "a.png")
    assert first != second
    assert first.startswith("photo-") and first.endswith(".png")


def test_discard_photo_removes_file(tmp_path):
    ref = asyncio.run(save_photo(_upload(b"png", "a.png", "image/png"), directory=str(tmp_path)))
    asyncio.run(discard_photo(ref, directory=str(tmp_path)))
    assert list(tmp_path.iterdir()) == []


def test_discard_photo_ignores_missing_reference(tmp_path):
    asyncio.run(discard_photo(None, directory=str(tmp_path)))
    asyncio.run(discard_photo("/uploads/photo-gone.png", directory=str(tmp_path)))
