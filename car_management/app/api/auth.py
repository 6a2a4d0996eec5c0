import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..core.errors import Unauthenticated
from ..core.security import TokenGate
from ..schemas.auth import LoginRequest, TokenRead
from .deps import get_token_gate

router = APIRouter(tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenRead)
async def login(
    payload: LoginRequest,
    gate: TokenGate = Depends(get_token_gate),
):
    """
    Логин по единственной паре из конфига, возвращает JWT на 24 часа.
    """
    if not gate.check_credentials(payload.username, payload.password):
        logger.warning("Failed login attempt for %r", payload.username)
        raise Unauthenticated("Incorrect username or password")

    issued_at = datetime.now(timezone.utc)
    token = gate.issue(payload.username, now=issued_at)

    return TokenRead(token=token, expires_at=gate.expires_at(issued_at))
