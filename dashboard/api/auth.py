# dashboard/api/auth.py

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from dashboard.actions.auth import authenticate
from dashboard.api.deps import identity_provider_dep, result_response
from dashboard.auth import IdentityProvider

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(
    request: Request,
    provider: IdentityProvider = Depends(identity_provider_dep),
):
    form = await request.form()
    result = await run_in_threadpool(authenticate, None, form, provider=provider)
    return result_response(result)
