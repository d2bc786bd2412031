import logging
import os
import random
import time

from fastapi import HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from .config import MAX_UPLOAD_BYTES, UPLOAD_DIR

CHUNK_SIZE = 64 * 1024
URL_PREFIX = "/uploads/"


def ensure_upload_dir(directory: str = UPLOAD_DIR) -> str:
    os.makedirs(directory, exist_ok=True)
    return directory


def unique_filename(field_name: str, original_name: str | None) -> str:
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    _, ext = os.path.splitext(original_name or "")
    return f"{field_name}-{suffix}{ext.lower()}"


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


async def save_photo(
    photo: UploadFile | None,
    directory: str = UPLOAD_DIR,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str | None:
    """Store an uploaded photo and return its public ``/uploads/...`` path.

    Only image content types are accepted, up to ``max_bytes``. A missing or
    empty upload resolves to ``None``. File writes run in the threadpool.
    """
    if photo is None or not photo.filename:
        return None
    if not (photo.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are allowed!")

    filename = unique_filename("photo", photo.filename)
    path = os.path.join(ensure_upload_dir(directory), filename)
    written = 0
    out = await run_in_threadpool(open, path, "wb")
    try:
        while chunk := await photo.read(CHUNK_SIZE):
            written += len(chunk)
            if written > max_bytes:
                raise HTTPException(status_code=413, detail="File too large")
            await run_in_threadpool(out.write, chunk)
    except Exception:
        await run_in_threadpool(out.close)
        await run_in_threadpool(_remove, path)
        raise
    else:
        await run_in_threadpool(out.close)
    finally:
        await photo.close()

    logging.info("Stored photo %s (%d bytes)", filename, written)
    return URL_PREFIX + filename


async def discard_photo(image_ref: str | None, directory: str = UPLOAD_DIR) -> None:
    """Delete a photo saved by ``save_photo`` that no request ended up using."""
    if not image_ref or not image_ref.startswith(URL_PREFIX):
        return
    path = os.path.join(directory, os.path.basename(image_ref))
    await run_in_threadpool(_remove, path)
    logging.info("Discarded unused photo %s", image_ref)
