"""Point transfer endpoints: create, confirm, fetch and list."""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from loyalty.core.config import Settings
from loyalty.core.security import get_current_account
from loyalty.interfaces.http.deps import get_app_settings, get_transfer_service
from loyalty.interfaces.http.errors import to_http_exception
from loyalty.interfaces.http.pagination import build_page_request
from loyalty.modules.accounts import Account
from loyalty.modules.common import DomainError
from loyalty.modules.transfers import SORTABLE_FIELDS, TransferService
from loyalty.schemas import (
    TransferActionResponse,
    TransferCreateRequest,
    TransferListResponse,
    TransferResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=TransferActionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a pending transfer",
)
async def create_transfer(
    payload: TransferCreateRequest,
    account: Account = Depends(get_current_account),
    service: TransferService = Depends(get_transfer_service),
) -> TransferActionResponse:
    try:
        transfer = await service.create(account.id, payload.receiver_email, payload.amount)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return TransferActionResponse(
        message="Transfer created",
        transfer=TransferResponse.model_validate(transfer),
    )


@router.post(
    "/{transfer_id}/confirm",
    response_model=TransferActionResponse,
    summary="Confirm a pending transfer (sender only)",
)
async def confirm_transfer(
    transfer_id: str = Path(..., min_length=1),
    account: Account = Depends(get_current_account),
    service: TransferService = Depends(get_transfer_service),
) -> TransferActionResponse:
    try:
        transfer = await service.confirm(transfer_id, account.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return TransferActionResponse(
        message="Transfer confirmed",
        transfer=TransferResponse.model_validate(transfer),
    )


@router.get("/{transfer_id}", response_model=TransferResponse, summary="Fetch one of your transfers")
async def get_transfer(
    transfer_id: str = Path(..., min_length=1),
    account: Account = Depends(get_current_account),
    service: TransferService = Depends(get_transfer_service),
) -> TransferResponse:
    try:
        transfer = await service.get_by_id(transfer_id, account.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return TransferResponse.model_validate(transfer)


@router.get("", response_model=TransferListResponse, summary="List transfers you sent or received")
async def list_transfers(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    sort_by: str = Query("created_at:asc", description="field:asc or field:desc"),
    account: Account = Depends(get_current_account),
    service: TransferService = Depends(get_transfer_service),
    settings: Settings = Depends(get_app_settings),
) -> TransferListResponse:
    request = build_page_request(settings, page=page, limit=limit, sort_by=sort_by, allowed=SORTABLE_FIELDS)
    result = await service.list_for_account(account.id, request)
    return TransferListResponse(
        total_items=result.total_items,
        total_pages=result.total_pages,
        current_page=result.current_page,
        page_size=result.page_size,
        data=[TransferResponse.model_validate(item) for item in result.items],
    )
