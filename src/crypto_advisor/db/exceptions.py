"""Storage-level errors surfaced to the HTTP layer."""


class EmailAlreadyExistsError(Exception):
    """Signup attempted with an email that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already exists: {email}")
        self.email = email
