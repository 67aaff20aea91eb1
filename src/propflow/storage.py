"""Storage backend for damage photos and videos kept on S3."""

from storages.backends.s3boto3 import S3Boto3Storage


class ProxiedS3Storage(S3Boto3Storage):
    """S3 storage that hands out local /media/ URLs.

    URLs stored on status history entries must not depend on the bucket
    endpoint; ``propflow.views.media_proxy`` serves them.
    """

    def url(self, name):
        return f"/media/{name}"
