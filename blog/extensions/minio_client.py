from collections import namedtuple
from threading import Lock

import urllib3
from flask import current_app
from minio import Minio


MinioSettings = namedtuple(
    "MinioSettings",
    "endpoint access_key secret_key secure connect_timeout read_timeout pool_size",
)

_state = {"client": None, "settings": None, "buckets": set()}
_lock = Lock()


def _current_settings() -> MinioSettings:
    config = current_app.config
    return MinioSettings(
        endpoint=config["MINIO_ENDPOINT"],
        access_key=config["MINIO_ACCESS_KEY"],
        secret_key=config["MINIO_SECRET_KEY"],
        secure=config["MINIO_SECURE"],
        connect_timeout=config["MINIO_CONNECT_TIMEOUT"],
        read_timeout=config["MINIO_READ_TIMEOUT"],
        pool_size=config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    )


def _build_client(settings: MinioSettings) -> Minio:
    http_client = urllib3.PoolManager(
        timeout=urllib3.Timeout(
            connect=settings.connect_timeout,
            read=settings.read_timeout,
        ),
        retries=False,
        maxsize=settings.pool_size,
    )
    return Minio(
        settings.endpoint,
        access_key=settings.access_key,
        secret_key=settings.secret_key,
        secure=settings.secure,
        http_client=http_client,
    )


def get_minio_client():
    """Shared client for the blob store, rebuilt when its settings change."""
    settings = _current_settings()
    with _lock:
        if _state["client"] is None or _state["settings"] != settings:
            _state["client"] = _build_client(settings)
            _state["settings"] = settings
            _state["buckets"] = set()
        return _state["client"]


def ensure_bucket(client, bucket: str):
    with _lock:
        if bucket in _state["buckets"]:
            return
        if not client.bucket_exists(bucket):
            client.make_bucket(bucket)
        _state["buckets"].add(bucket)
