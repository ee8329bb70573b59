import uuid
from datetime import datetime

from blog.db import db


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=False, default="")
    filename = db.Column(db.String(255), nullable=False)
    author_id = db.Column(db.String(32), nullable=False, index=True)
    username = db.Column(db.String(254), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
