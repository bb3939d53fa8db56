import hmac
import logging
from typing import Iterable, Mapping, Optional

from fastapi import Request

from consumer_integration.config import settings
from consumer_integration.errors import AuthError

logger = logging.getLogger(__name__)

AUTH_SCHEMES = ("bearer", "token")


def strip_scheme(value: str) -> str:
    """Drop a leading ``Bearer``/``Token`` scheme, case-insensitive."""
    value = value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() in AUTH_SCHEMES:
        # a bare scheme carries no credential
        return rest.strip()
    return value


def resolve_token(
    authorization: Optional[str],
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    header_aliases: Iterable[str] = (),
    query_param: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the credential from the first source that carries one:
    the Authorization header, then the alternate headers in order,
    then the query string. Sources are never combined.
    """
    if authorization:
        token = strip_scheme(authorization)
        if token:
            return token

    for name in header_aliases:
        value = (headers.get(name) or "").strip()
        if value:
            return value

    if query_param:
        value = (query_params.get(query_param) or "").strip()
        if value:
            return value

    return None


def verify_token(candidate: Optional[str], secret: str) -> bool:
    if not candidate or not secret:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


def require_api_token(request: Request) -> str:
    token = resolve_token(
        request.headers.get("authorization"),
        request.headers,
        request.query_params,
        header_aliases=settings.token_header_aliases,
        query_param=settings.token_query_param,
    )

    if not verify_token(token, settings.api_token):
        logger.warning(f"Rejected request to {request.url.path}: invalid or missing token")
        raise AuthError()

    return token
