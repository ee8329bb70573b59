from functools import wraps

from flask import current_app, g, make_response, redirect, request, url_for


DEFAULT_LANDING = "main.dashboard"


def _is_local_path(path) -> bool:
    return isinstance(path, str) and path.startswith("/") and not path.startswith("//")


def _current_path() -> str:
    if request.query_string:
        return f"{request.path}?{request.query_string.decode()}"
    return request.path


def remember_path(response, path):
    response.set_cookie(
        current_app.config["REDIRECT_COOKIE_NAME"],
        path,
        max_age=current_app.config["REDIRECT_COOKIE_MAX_AGE"],
        httponly=True,
        samesite="Lax",
    )
    return response


def redirect_after_auth():
    """Send a freshly authenticated user back where they came from."""
    cookie_name = current_app.config["REDIRECT_COOKIE_NAME"]
    target = request.cookies.get(cookie_name)
    if not _is_local_path(target):
        target = url_for(DEFAULT_LANDING)

    response = redirect(target)
    response.delete_cookie(cookie_name)
    return response


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("current_user") is not None:
            return view(*args, **kwargs)

        response = redirect(url_for("auth.login"))
        if request.method == "GET":
            remember_path(response, _current_path())
        return response

    return wrapped


def logout_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("current_user") is not None:
            return redirect(url_for(DEFAULT_LANDING))
        return view(*args, **kwargs)

    return wrapped


def remember_destination(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        response = make_response(view(*args, **kwargs))
        if g.get("current_user") is None and request.method == "GET":
            remember_path(response, _current_path())
        return response

    return wrapped
