"""Developer domain exceptions."""


class DeveloperDoesNotExistError(Exception):
    """No Edge developer belongs to the given email address."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Developer with {email} email address does not exist on Apigee Edge.")


class DeveloperAlreadyExistsError(Exception):
    """An Edge developer is already registered with the given email address."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Developer with {email} email address already exists on Apigee Edge.")
