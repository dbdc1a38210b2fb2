class AuthError(Exception):
    """Raised by an identity provider; `type` classifies the failure."""

    def __init__(self, type="CallbackRouteError", message=None):
        super().__init__()
        self.type = type
        self.message = message
        self.args = (type, message)

    def __str__(self):
        if self.message:
            return f"{self.type}: {self.message}"
        return self.type


class CredentialsSignin(AuthError):
    def __init__(self, message=None):
        super().__init__("CredentialsSignin", message)
