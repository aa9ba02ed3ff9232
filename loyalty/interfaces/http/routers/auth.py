"""Registration and login endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.config import Settings
from loyalty.core.security import create_access_token
from loyalty.interfaces.http.deps import get_account_service, get_app_settings, get_db_session
from loyalty.interfaces.http.errors import to_http_exception
from loyalty.modules.accounts import AccountAlreadyExistsError, AccountCreateInput, AccountService
from loyalty.schemas import AccountCreate, AccountResponse, AuthResponse, LoginRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
async def register(
    payload: AccountCreate,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    try:
        account = await account_service.register(
            AccountCreateInput(name=payload.name, email=payload.email, password=payload.password)
        )
    except AccountAlreadyExistsError as exc:
        await db.rollback()
        raise to_http_exception(exc) from exc
    await db.commit()

    return AuthResponse(
        access_token=create_access_token(account, settings),
        account=AccountResponse.model_validate(account),
    )


@router.post("/login", response_model=AuthResponse, summary="Log in with email and password")
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
) -> AuthResponse:
    account = await account_service.authenticate(payload.email, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

    return AuthResponse(
        access_token=create_access_token(account, settings),
        account=AccountResponse.model_validate(account),
    )
