from datetime import datetime

from blog.models.post_model import Post
from blog.db import db


def create_post(title, body, filename, author_id, username, created_at=None):
    post = Post(
        title=title,
        body=body,
        filename=filename,
        author_id=author_id,
        username=username,
        created_at=created_at or datetime.utcnow(),
    )
    db.session.add(post)
    db.session.commit()
    return post


def get_by_id(post_id: str):
    return db.session.get(Post, post_id)


def list_posts(oldest_first=False):
    order = Post.created_at.asc() if oldest_first else Post.created_at.desc()
    return Post.query.order_by(order).all()


def list_by_author(author_id: str):
    return (
        Post.query
        .filter(Post.author_id == author_id)
        .order_by(Post.created_at.desc())
        .all()
    )


def save(post):
    db.session.add(post)
    db.session.commit()
    return post


def delete(post):
    db.session.delete(post)
    db.session.commit()
