"""Tests for concurrent damage media uploads."""

import re
from unittest.mock import MagicMock

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from props.services.media import media_path, upload_media


def _image(name):
    return SimpleUploadedFile(name, b"fake-image", content_type="image/jpeg")


def _fake_storage(fail_on=()):
    storage = MagicMock()

    def save(path, upload):
        if upload.name in fail_on:
            raise OSError(f"bucket rejected {upload.name}")
        return path

    storage.save.side_effect = save
    storage.url.side_effect = lambda name: f"https://cdn.example.com/{name}"
    return storage


class TestMediaPath:
    def test_layout(self):
        path = media_path(7, "images", "front view.jpg")
        assert re.fullmatch(
            r"props/7/damage/images/[0-9a-f]{12}_front_view\.jpg", path
        )

    def test_unique_per_call(self):
        assert media_path(1, "images", "a.jpg") != media_path(
            1, "images", "a.jpg"
        )

    def test_missing_filename_uses_kind(self):
        assert media_path(1, "videos", None).endswith("_videos")


class TestUploadMedia:
    def test_no_files(self):
        assert upload_media(1, None) == ([], [])
        assert upload_media(1, []) == ([], [])

    def test_urls_keep_input_order(self):
        storage = _fake_storage()
        files = [_image(f"{n}.jpg") for n in range(6)]

        urls, errors = upload_media(3, files, storage=storage)

        assert errors == []
        assert len(urls) == 6
        for n, url in enumerate(urls):
            assert url.endswith(f"_{n}.jpg")
            assert url.startswith("https://cdn.example.com/props/3/damage/")

    def test_failed_upload_skipped(self):
        storage = _fake_storage(fail_on={"bad.jpg"})

        urls, errors = upload_media(
            3, [_image("good.jpg"), _image("bad.jpg")], storage=storage
        )

        assert len(urls) == 1
        assert urls[0].endswith("_good.jpg")
        assert len(errors) == 1
        assert errors[0].step == "upload"
        assert errors[0].detail == "bad.jpg"
        assert isinstance(errors[0].cause, OSError)

    def test_all_uploads_fail(self):
        storage = _fake_storage(fail_on={"a.jpg", "b.jpg"})
        urls, errors = upload_media(
            3, [_image("a.jpg"), _image("b.jpg")], storage=storage
        )
        assert urls == []
        assert len(errors) == 2

    def test_videos_path(self):
        storage = _fake_storage()
        urls, _ = upload_media(
            3,
            [SimpleUploadedFile("clip.mp4", b"fake-video")],
            kind="videos",
            storage=storage,
        )
        assert "/damage/videos/" in urls[0]

    def test_default_storage_writes_files(self):
        urls, errors = upload_media(9, [_image("crack.jpg")])

        assert errors == []
        assert len(urls) == 1
        saved = urls[0].split("media/", 1)[1]
        assert default_storage.exists(saved)
