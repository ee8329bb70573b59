from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from blog.errors import AuthenticationFailure, EmailInUse, ValidationError
from blog.routes.guards import logout_required, redirect_after_auth
from blog.services import auth_service


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/signup", methods=["GET"])
@logout_required
def signup_form():
    return render_template("signup.html", current_user=g.current_user)


@auth_bp.route("/signup", methods=["POST"])
@logout_required
def signup():
    try:
        user = auth_service.register(
            request.form.get("email"),
            request.form.get("password"),
        )
    except ValidationError as e:
        for message in e.messages:
            flash(message, "error")
        return redirect(url_for("auth.signup_form"))
    except EmailInUse as e:
        return e.message, e.status_code

    response = redirect_after_auth()
    auth_service.establish_session(response, user)
    return response


@auth_bp.route("/login", methods=["GET"])
@logout_required
def login_form():
    return render_template("login.html", current_user=g.current_user)


@auth_bp.route("/login", methods=["POST"])
@logout_required
def login():
    try:
        user = auth_service.authenticate(
            request.form.get("email"),
            request.form.get("password"),
        )
    except AuthenticationFailure as e:
        flash(e.message, "error")
        return redirect(url_for("auth.login_form"))

    response = redirect_after_auth()
    auth_service.establish_session(response, user)
    return response


@auth_bp.route("/logout", methods=["GET"])
def logout():
    response = redirect(url_for("main.feed"))
    auth_service.end_session(response)
    return response
