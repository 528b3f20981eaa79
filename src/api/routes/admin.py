"""
Admin API Routes - Maintenance Endpoints

Authentication is via Admin API Key, not user session tokens.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    PruneRevokedTokensResponse,
    PruneRevokedTokensUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/revoked-tokens/prune",
    status_code=status.HTTP_200_OK,
    response_model=PruneRevokedTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def prune_revoked_tokens(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Prune Revoked Tokens

    Deletes revocation entries whose token has passed its own expiry.
    Intended to be called periodically by a scheduler.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = PruneRevokedTokensUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
