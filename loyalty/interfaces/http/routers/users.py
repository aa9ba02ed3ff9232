"""Admin endpoints for managing accounts."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.config import Settings
from loyalty.core.security import get_current_admin
from loyalty.interfaces.http.deps import get_account_service, get_app_settings, get_db_session
from loyalty.interfaces.http.errors import to_http_exception
from loyalty.interfaces.http.pagination import build_page_request
from loyalty.modules.accounts import (
    SORTABLE_FIELDS,
    Account,
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountService,
)
from loyalty.schemas import AccountListResponse, AccountResponse, AdminAccountCreate

router = APIRouter()


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account (admin only)",
)
async def create_user(
    payload: AdminAccountCreate,
    admin: Account = Depends(get_current_admin),
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountResponse:
    try:
        account = await account_service.register(
            AccountCreateInput(
                name=payload.name,
                email=payload.email,
                password=payload.password,
                role=payload.role,
                is_active=payload.is_active,
            )
        )
    except AccountAlreadyExistsError as exc:
        await db.rollback()
        raise to_http_exception(exc) from exc

    await db.commit()
    return AccountResponse.model_validate(account)


@router.get("", response_model=AccountListResponse, summary="List accounts (admin only)")
async def list_users(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("created_at:asc", description="field:asc or field:desc"),
    admin: Account = Depends(get_current_admin),
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
) -> AccountListResponse:
    request = build_page_request(settings, page=page, limit=limit, sort_by=sort_by, allowed=SORTABLE_FIELDS)
    result = await account_service.list_accounts(request)
    return AccountListResponse(
        total_items=result.total_items,
        total_pages=result.total_pages,
        current_page=result.current_page,
        page_size=result.page_size,
        data=[AccountResponse.model_validate(item) for item in result.items],
    )
