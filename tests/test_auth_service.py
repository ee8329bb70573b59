import unittest

from blog_test_case import BlogTestCase


class TestAuthService(BlogTestCase):
    def test_validation_collects_every_message(self):
        from blog.errors import ValidationError
        from blog.services import auth_service

        with self.assertRaises(ValidationError) as ctx:
            auth_service.validate_credentials("missing-at-sign", "12345")

        self.assertEqual(
            ctx.exception.messages,
            [
                "Please enter a valid email address",
                "Password must be at least 6 characters long",
            ],
        )

    def test_validation_accepts_six_character_password(self):
        from blog.services import auth_service

        auth_service.validate_credentials("alice@example.com", "123456")

    def test_register_rejects_missing_fields(self):
        from blog.errors import ValidationError
        from blog.services import auth_service

        with self.app.app_context():
            with self.assertRaises(ValidationError):
                auth_service.register(None, None)

    def test_authenticate_failures_are_indistinguishable(self):
        from blog.errors import AuthenticationFailure
        from blog.services import auth_service

        self._register("alice@example.com")

        with self.app.app_context():
            with self.assertRaises(AuthenticationFailure) as wrong_password:
                auth_service.authenticate("alice@example.com", "nope-nope")
            with self.assertRaises(AuthenticationFailure) as unknown_email:
                auth_service.authenticate("bob@example.com", "pass123")

            user = auth_service.authenticate(" ALICE@example.com ", "pass123")
            self.assertEqual(user.email, "alice@example.com")

        self.assertEqual(wrong_password.exception.message, unknown_email.exception.message)
        self.assertEqual(wrong_password.exception.message, "Incorrect email or password")


if __name__ == "__main__":
    unittest.main()
