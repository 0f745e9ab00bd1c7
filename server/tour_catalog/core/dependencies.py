"""FastAPI dependencies for the document store, image uploads, and authentication."""

from typing import Optional

import jwt
from fastapi import Depends, Header, Request
from jwt import PyJWTError
from motor.motor_asyncio import AsyncIOMotorDatabase

from .database import MongoGateway, StoreConnectionError
from .exceptions import AuthenticationError, UpstreamError
from .security import decode_access_token


async def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    Database dependency returning the shared database handle.

    Raises:
        UpstreamError: If the document store cannot be reached
    """
    gateway: MongoGateway = request.app.state.gateway
    try:
        return await gateway.connect()
    except StoreConnectionError as e:
        raise UpstreamError(detail=str(e), service="document-store") from e


async def get_uploader(request: Request):
    """Image uploader dependency."""
    return request.app.state.uploader


async def get_current_admin(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> dict:
    """
    Authentication dependency that validates admin Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token

    Returns:
        dict: Admin identity from the validated token

    Raises:
        AuthenticationError: If the token is missing, malformed, or invalid
    """
    if not authorization:
        raise AuthenticationError(detail="Authorization header missing")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(detail="Invalid authorization header format")

    try:
        payload = decode_access_token(token.strip())
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(detail="Token has expired")
    except PyJWTError as e:
        raise AuthenticationError(detail=f"Token validation failed: {e}")

    return {
        "admin_id": payload["sub"],
        "username": payload.get("username"),
    }


DatabaseSession = Depends(get_db)
ImageUploader = Depends(get_uploader)
RequiredAdmin = Depends(get_current_admin)
