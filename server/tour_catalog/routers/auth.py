"""Authentication router for admin sessions."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.dependencies import DatabaseSession
from ..schemas.auth import LoginRequest, LoginResponse
from ..services.auth_service import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: AsyncIOMotorDatabase = DatabaseSession,
) -> JSONResponse:
    """
    Exchange admin credentials for a bearer token.

    The token is returned in the body; send it back as
    ``Authorization: Bearer <token>`` on admin requests.
    """
    token = await AuthService(db).login(request.username, request.password)
    return JSONResponse(content=LoginResponse(token=token).model_dump())
