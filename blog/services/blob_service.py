import os
import re
import uuid

from flask import Response, abort, current_app, send_from_directory, stream_with_context
from minio.error import S3Error
from werkzeug.utils import secure_filename

from blog.errors import BlobStorageError
from blog.extensions.minio_client import ensure_bucket, get_minio_client


SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def _backend() -> str:
    return current_app.config.get("BLOB_BACKEND", "local")


def _extension_for(original_filename: str) -> str:
    _, extension = os.path.splitext(original_filename or "")
    if not SAFE_EXTENSION.match(extension):
        return ""
    return extension.lower()


def generate_name(original_filename: str) -> str:
    """Unique blob name that keeps the uploaded file's extension."""
    return f"{uuid.uuid4().hex}{_extension_for(original_filename)}"


def _local_path(name: str) -> str:
    return os.path.join(current_app.config["UPLOAD_FOLDER"], name)


def _get_stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (AttributeError, OSError):
        return stream, -1


def save(file_storage) -> str:
    if file_storage is None or not getattr(file_storage, "filename", ""):
        raise ValueError("An image file is required")

    name = generate_name(file_storage.filename)

    if _backend() == "minio":
        bucket = current_app.config["MINIO_BUCKET"]
        try:
            client = get_minio_client()
            ensure_bucket(client, bucket)
            stream, length = _get_stream_and_length(file_storage)
            upload_kwargs = {
                "bucket_name": bucket,
                "object_name": name,
                "data": stream,
                "length": length,
                "content_type": file_storage.mimetype or "application/octet-stream",
            }
            if length == -1:
                upload_kwargs["part_size"] = 10 * 1024 * 1024
            client.put_object(**upload_kwargs)
        except Exception as e:
            raise BlobStorageError() from e
        return name

    try:
        os.makedirs(current_app.config["UPLOAD_FOLDER"], exist_ok=True)
        file_storage.save(_local_path(name))
    except OSError as e:
        raise BlobStorageError() from e
    return name


def delete(name: str):
    if _backend() == "minio":
        try:
            get_minio_client().remove_object(
                bucket_name=current_app.config["MINIO_BUCKET"],
                object_name=name,
            )
        except Exception as e:
            raise BlobStorageError(f"Could not delete blob {name}") from e
        return

    try:
        os.remove(_local_path(name))
    except OSError as e:
        raise BlobStorageError(f"Could not delete blob {name}") from e


def discard(name) -> bool:
    """Delete a blob, logging instead of raising when that fails."""
    if not name:
        return False
    try:
        delete(name)
    except BlobStorageError as e:
        current_app.logger.warning("%s: %s", e.message, e.__cause__)
        return False
    current_app.logger.debug("Deleted blob %s", name)
    return True


def send(name: str):
    if secure_filename(name) != name:
        abort(404)

    if _backend() != "minio":
        return send_from_directory(current_app.config["UPLOAD_FOLDER"], name)

    bucket = current_app.config["MINIO_BUCKET"]
    try:
        minio_response = get_minio_client().get_object(
            bucket_name=bucket,
            object_name=name,
        )
    except S3Error as e:
        if e.code in {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}:
            abort(404)
        raise BlobStorageError() from e
    except Exception as e:
        raise BlobStorageError() from e

    chunk_size = max(int(current_app.config.get("MEDIA_STREAM_CHUNK_SIZE", 256 * 1024)), 1024)
    content_type = minio_response.headers.get("Content-Type", "application/octet-stream")

    def _stream():
        try:
            for chunk in minio_response.stream(chunk_size):
                yield chunk
        finally:
            minio_response.close()
            minio_response.release_conn()

    return Response(
        stream_with_context(_stream()),
        status=200,
        headers={"Content-Type": content_type},
        direct_passthrough=True,
    )
