"""JWT helpers and the current-account dependency."""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from loyalty.core.config import Settings
from loyalty.interfaces.http.deps import get_account_service, get_app_settings
from loyalty.modules.accounts import Account, AccountService
from loyalty.schemas import TokenData

security = HTTPBearer(auto_error=False)

CREDENTIALS_ERROR = "Please authenticate"


def _unauthorized(detail: str = CREDENTIALS_ERROR) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(
    account: Account,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": account.id,
        "email": account.email,
        "role": account.role,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenData:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise _unauthorized() from exc

    account_id = payload.get("sub")
    email = payload.get("email")
    role = payload.get("role")
    if not all([account_id, email, role]):
        raise _unauthorized()
    return TokenData(account_id=account_id, email=email, role=role)


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
    service: AccountService = Depends(get_account_service),
) -> Account:
    if credentials is None:
        raise _unauthorized()
    token_data = decode_access_token(credentials.credentials, settings)
    account = await service.get_by_id(token_data.account_id)
    if account is None or not account.is_active:
        raise _unauthorized()
    return account


async def get_current_admin(account: Account = Depends(get_current_account)) -> Account:
    if not account.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return account
