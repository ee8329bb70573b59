import uuid
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from blog.db import db
from blog.errors import Forbidden, MalformedIdentifier, NotFound, StoreFailure
from blog.repositories import post_repository
from blog.services import blob_service, permissions


def parse_post_id(post_id) -> str:
    try:
        return uuid.UUID(str(post_id)).hex
    except (TypeError, ValueError) as e:
        raise MalformedIdentifier() from e


def _store_failure(message, *args):
    db.session.rollback()
    current_app.logger.exception(message, *args)
    return StoreFailure()


def create_post(author, title, body, image):
    filename = blob_service.save(image)

    try:
        return post_repository.create_post(
            title=(title or "").strip(),
            body=body or "",
            filename=filename,
            author_id=author.id,
            username=author.display_name,
            created_at=datetime.utcnow(),
        )
    except SQLAlchemyError as e:
        failure = _store_failure("Could not save post for user %s", author.id)
        blob_service.discard(filename)
        raise failure from e


def list_feed(sortby=None):
    try:
        return post_repository.list_posts(oldest_first=(sortby == "old"))
    except SQLAlchemyError as e:
        raise _store_failure("Could not load the feed") from e


def list_by_author(author_id):
    try:
        return post_repository.list_by_author(str(author_id))
    except SQLAlchemyError as e:
        raise _store_failure("Could not load posts of %s", author_id) from e


def get_post(post_id):
    post_id = parse_post_id(post_id)
    try:
        post = post_repository.get_by_id(post_id)
    except SQLAlchemyError as e:
        raise _store_failure("Could not load post %s", post_id) from e

    if not post:
        raise NotFound()
    return post


def get_post_for(action, user, post_id):
    post = get_post(post_id)
    if not permissions.is_allowed(action, user, post):
        raise Forbidden(permissions.DENIED_MESSAGES[action])
    return post


def delete_post(user, post_id):
    post = get_post_for("delete_post", user, post_id)

    blob_service.discard(post.filename)

    try:
        post_repository.delete(post)
    except SQLAlchemyError as e:
        raise _store_failure("Could not delete post %s", post.id) from e

    current_app.logger.debug("Deleted post %s", post.id)


def update_post(user, post_id, title, body, new_image=None):
    post = get_post_for("edit_post", user, post_id)

    old_filename = post.filename
    new_filename = None
    if new_image is not None and getattr(new_image, "filename", ""):
        new_filename = blob_service.save(new_image)

    post.title = (title or "").strip()
    post.body = body or ""
    if new_filename:
        post.filename = new_filename

    try:
        post_repository.save(post)
    except SQLAlchemyError as e:
        failure = _store_failure("Could not update post %s", post.id)
        if new_filename:
            blob_service.discard(new_filename)
        raise failure from e

    if new_filename and old_filename:
        blob_service.discard(old_filename)
    return post
