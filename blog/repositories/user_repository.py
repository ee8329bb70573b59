from blog.models.user_model import User
from blog.db import db


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def get_by_id(user_id: str):
    return db.session.get(User, user_id)


def create_user(email, password_hash, is_admin=False):
    user = User(
        email=email,
        password_hash=password_hash,
        is_admin=is_admin,
    )
    db.session.add(user)
    db.session.commit()
    return user


def set_admin(user, is_admin=True):
    user.is_admin = is_admin
    db.session.commit()
    return user
