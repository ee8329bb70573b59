"""Who may do what to a post.

Deleting is open to the author and to admins. Editing is reserved to the
author, with no admin override.
"""

AUTHOR = "author"
ADMIN = "admin"

POLICIES = {
    "delete_post": frozenset({AUTHOR, ADMIN}),
    "edit_post": frozenset({AUTHOR}),
}

DENIED_MESSAGES = {
    "delete_post": "You are not authorized to delete this post",
    "edit_post": "You are not authorized to edit this post",
}


def roles_for(user, post):
    roles = set()
    if user is None:
        return roles
    if str(post.author_id) == str(user.id):
        roles.add(AUTHOR)
    if getattr(user, "is_admin", False):
        roles.add(ADMIN)
    return roles


def is_allowed(action: str, user, post) -> bool:
    return bool(POLICIES[action] & roles_for(user, post))
