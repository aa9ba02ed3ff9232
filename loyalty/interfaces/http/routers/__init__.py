from fastapi import APIRouter

from loyalty.interfaces.http.routers import accounts, auth, transfers, users


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    router.include_router(transfers.router, prefix="/transfers", tags=["transfers"])
    router.include_router(users.router, prefix="/users", tags=["users"])
    return router


__all__ = [
    "create_api_router",
]
