from flask import Blueprint, g, get_flashed_messages, render_template, request

from blog.routes.guards import login_required, remember_destination
from blog.services import blob_service, post_service


main_bp = Blueprint("main", __name__)


@main_bp.route("/", methods=["GET"])
@remember_destination
def feed():
    posts = post_service.list_feed(request.args.get("sortby"))
    return render_template(
        "index.html",
        posts=posts,
        sortby=request.args.get("sortby"),
        current_user=g.current_user,
    )


@main_bp.route("/dashboard", methods=["GET"])
@login_required
def dashboard():
    return render_template(
        "dashboard.html",
        success_messages=get_flashed_messages(category_filter=["success"]),
        error_messages=get_flashed_messages(category_filter=["error"]),
        current_user=g.current_user,
    )


@main_bp.route("/uploads/<path:name>", methods=["GET"])
def uploaded_file(name):
    return blob_service.send(name)
