import re

from flask import current_app
from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from blog.db import db
from blog.errors import AuthenticationFailure, EmailInUse, StoreFailure, ValidationError
from blog.repositories import user_repository


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS = "Incorrect email or password"


def _normalize_email(email):
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def validate_credentials(email, password):
    errors = []
    if not EMAIL_PATTERN.match(_normalize_email(email)):
        errors.append("Please enter a valid email address")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if errors:
        raise ValidationError(errors)


def register(email, password):
    validate_credentials(email, password)
    email = _normalize_email(email)

    try:
        if user_repository.get_by_email(email):
            raise EmailInUse()

        return user_repository.create_user(
            email=email,
            password_hash=generate_password_hash(password),
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Could not create user %s", email)
        raise StoreFailure() from e


def authenticate(email, password):
    email = _normalize_email(email)
    if not email or not isinstance(password, str) or not password:
        raise AuthenticationFailure(INVALID_CREDENTIALS)

    try:
        user = user_repository.get_by_email(email)
    except SQLAlchemyError as e:
        current_app.logger.exception("User lookup failed during login")
        raise StoreFailure() from e

    if not user or not check_password_hash(user.password_hash, password):
        raise AuthenticationFailure(INVALID_CREDENTIALS)
    return user


def establish_session(response, user):
    token = create_access_token(identity=user.id)
    set_access_cookies(response, token)
    return token


def restore_session():
    """Resolve the user behind the session cookie, or None."""
    try:
        verify_jwt_in_request(optional=True)
        user_id = get_jwt_identity()
    except (JWTExtendedException, PyJWTError) as e:
        current_app.logger.info("Ignoring invalid session token: %s", e)
        return None

    if not user_id:
        return None

    try:
        return user_repository.get_by_id(user_id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Could not restore session for user %s", user_id)
        return None


def end_session(response):
    unset_jwt_cookies(response)
    return response
