"""Concurrent upload of damage photos and videos."""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from ..exceptions import SideEffectError

logger = logging.getLogger(__name__)


def media_path(prop_id, kind, filename) -> str:
    """Storage path for one uploaded file, unique per upload."""
    name = get_valid_filename(filename or kind) or kind
    return f"props/{prop_id}/damage/{kind}/{uuid.uuid4().hex[:12]}_{name}"


def _upload_one(storage, prop_id, kind, upload):
    path = media_path(prop_id, kind, getattr(upload, "name", ""))
    saved_name = storage.save(path, upload)
    return storage.url(saved_name)


def upload_media(prop_id, files, kind="images", storage=None) -> tuple:
    """Upload ``files`` concurrently for ``prop_id``.

    Returns ``(urls, errors)``. ``urls`` keeps the input order and skips
    files whose upload failed; each failure is logged and reported as a
    ``SideEffectError`` rather than raised.
    """
    files = list(files or [])
    if not files:
        return [], []
    storage = storage or default_storage
    workers = min(
        len(files), getattr(settings, "PROP_MEDIA_UPLOAD_WORKERS", 4)
    )

    urls, errors = [], []
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="prop-media"
    ) as executor:
        futures = [
            executor.submit(_upload_one, storage, prop_id, kind, f)
            for f in files
        ]
        for upload, future in zip(files, futures):
            try:
                urls.append(future.result())
            except Exception as exc:
                name = getattr(upload, "name", "") or "<unnamed>"
                logger.warning(
                    "Failed to upload %s %s for prop %s: %s",
                    kind,
                    name,
                    prop_id,
                    exc,
                )
                errors.append(
                    SideEffectError("upload", prop_id, exc, detail=name)
                )
    return urls, errors
