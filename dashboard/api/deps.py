# dashboard/api/deps.py
"""FastAPI dependencies and result -> response mapping shared by the routers."""

from typing import Union

from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine

from dashboard.actions.results import (
    AuthenticationFailure,
    ExecutionFailure,
    Success,
    ValidationFailure,
)
from dashboard.auth import CredentialsProvider, IdentityProvider
from dashboard.cache import PageCache, get_page_cache
from dashboard.config import Settings, get_settings
from dashboard.db.engine import get_engine


def engine_dep() -> Engine:
    return get_engine()


def cache_dep() -> PageCache:
    return get_page_cache()


def settings_dep() -> Settings:
    return get_settings()


def identity_provider_dep() -> IdentityProvider:
    return CredentialsProvider()


def result_response(
    result: Union[Success, ValidationFailure, ExecutionFailure, AuthenticationFailure],
) -> Union[RedirectResponse, JSONResponse]:
    if isinstance(result, Success):
        return RedirectResponse(result.next_path, status_code=303)

    if isinstance(result, ValidationFailure):
        status_code = 422
    elif isinstance(result, AuthenticationFailure):
        status_code = 401
    else:
        status_code = 500

    return JSONResponse(
        result.to_state().model_dump(exclude_none=True),
        status_code=status_code,
    )
