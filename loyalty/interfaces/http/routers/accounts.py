"""Endpoints about the authenticated account."""
from fastapi import APIRouter, Depends

from loyalty.core.security import get_current_account
from loyalty.modules.accounts import Account
from loyalty.schemas import AccountResponse

router = APIRouter()


@router.get("/me", response_model=AccountResponse, summary="Current account and point balance")
async def current_account(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.model_validate(account)
