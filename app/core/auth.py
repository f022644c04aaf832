import logging
from typing import Optional

from fastapi import Header

from app.core.security import decode_token, extract_bearer_token

logger = logging.getLogger(__name__)


async def get_caller_id(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Идентификатор вызывающего из bearer токена или None для анонимного запроса.

    Аутентификация происходит вне сервиса, здесь только читается claim sub.
    Решение о том, нужна ли операции идентичность, принимают сервисы.
    """
    token = extract_bearer_token(authorization)
    if not token:
        return None

    payload = decode_token(token)
    if not payload:
        logger.warning("Rejected invalid bearer token")
        return None

    subject = payload.get("sub")
    return str(subject) if subject else None
