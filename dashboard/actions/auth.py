# dashboard/actions/auth.py

from typing import Any, Mapping, Optional

from dashboard.actions.results import AuthenticationFailure, AuthResult, Success
from dashboard.auth import CredentialsProvider, IdentityProvider
from dashboard.exceptions import AuthError

DASHBOARD_PATH = "/dashboard"


def authenticate(
    prev_state: Optional[str],
    form_data: Mapping[str, Any],
    *,
    provider: Optional[IdentityProvider] = None,
) -> AuthResult:
    """
    Sign in with the credentials provider.

    Only AuthError is translated into a message; anything else the provider
    raises is left to the caller.
    """
    provider = provider or CredentialsProvider()
    try:
        provider.sign_in("credentials", form_data)
    except AuthError as error:
        if error.type == "CredentialsSignin":
            return AuthenticationFailure("Invalid credentials.")
        return AuthenticationFailure("Something went wrong.")

    return Success(next_path=DASHBOARD_PATH)
