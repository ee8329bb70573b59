from flask import Blueprint, flash, g, redirect, render_template, request, url_for

from blog.errors import StoreFailure
from blog.routes.guards import login_required
from blog.services import post_service


post_bp = Blueprint("posts", __name__)


@post_bp.route("/post", methods=["POST"])
@login_required
def create_post():
    image = request.files.get("image")
    if image is None or not image.filename:
        flash("An image is required to create a post.", "error")
        return "An image is required", 400

    try:
        post_service.create_post(
            g.current_user,
            request.form.get("title"),
            request.form.get("body"),
            image,
        )
    except StoreFailure:
        flash("Internal Server Error", "error")
        return "Internal Server Error", 500

    flash("Post created successfully.", "success")
    return redirect(url_for("main.dashboard"))


@post_bp.route("/myposts", methods=["GET"])
@login_required
def my_posts():
    posts = post_service.list_by_author(g.current_user.id)
    return render_template("myposts.html", posts=posts, current_user=g.current_user)


@post_bp.route("/posts/<post_id>", methods=["GET"])
def show_post(post_id):
    post = post_service.get_post(post_id)
    return render_template("post.html", post=post, current_user=g.current_user)


@post_bp.route("/posts/user/<author_id>", methods=["GET"])
def posts_by_author(author_id):
    posts = post_service.list_by_author(author_id)
    return render_template(
        "index.html",
        posts=posts,
        sortby=None,
        current_user=g.current_user,
    )


@post_bp.route("/delete/<post_id>", methods=["GET"])
@login_required
def delete_post(post_id):
    post_service.delete_post(g.current_user, post_id)
    return redirect(url_for("posts.my_posts"))


@post_bp.route("/post/edit/<post_id>", methods=["GET"])
@login_required
def edit_post_form(post_id):
    post = post_service.get_post_for("edit_post", g.current_user, post_id)
    return render_template("edit.html", post=post, current_user=g.current_user)


@post_bp.route("/post/edit/<post_id>", methods=["POST"])
@login_required
def edit_post(post_id):
    post = post_service.update_post(
        g.current_user,
        post_id,
        request.form.get("title"),
        request.form.get("body"),
        request.files.get("newImage"),
    )
    return redirect(url_for("posts.edit_post_form", post_id=post.id))
