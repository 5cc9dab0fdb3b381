"""
Caller identity.

Authentication happens upstream; this service only trusts the principal
header the identity layer forwards. Every store query is scoped by it.
"""
from fastapi import Request

from habitlog.core.config import settings
from habitlog.core.errors import MissingPrincipalError


def get_principal(request: Request) -> str:
    value = request.headers.get(settings.PRINCIPAL_HEADER, "").strip()
    if not value:
        raise MissingPrincipalError(settings.PRINCIPAL_HEADER)
    return value
