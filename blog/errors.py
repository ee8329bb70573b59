from flask import current_app


class BlogError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(BlogError):
    status_code = 400
    message = "Invalid input"

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class AuthenticationFailure(BlogError):
    status_code = 401
    message = "Incorrect email or password"


class EmailInUse(BlogError):
    status_code = 400
    message = "Email is already in use."


class MalformedIdentifier(BlogError):
    status_code = 400
    message = "Invalid post ID"


class NotFound(BlogError):
    status_code = 404
    message = "Post not found"


class Forbidden(BlogError):
    status_code = 403
    message = "You are not authorized to perform this action"


class StoreFailure(BlogError):
    status_code = 500
    message = "Internal Server Error"


class BlobStorageError(StoreFailure):
    message = "Media storage is unavailable"


def register_error_handlers(app):
    @app.errorhandler(BlogError)
    def handle_blog_error(error):
        if error.status_code >= 500:
            current_app.logger.error("Request failed: %s", error.message)
            # Storage details are never shown to the client.
            return "Internal Server Error", error.status_code
        return error.message, error.status_code
