"""Admin authentication service."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from ..core.exceptions import AuthenticationError
from ..core.observability import get_logger, metrics_collector
from ..core.security import create_access_token, verify_password
from ..models.admin import ADMIN_COLLECTION, PASSWORD_HASH_FIELD

audit_log = get_logger("auth")

INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Service for admin credential checks and token issuance."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[ADMIN_COLLECTION]

    async def login(self, username: str, password: str) -> str:
        """
        Check admin credentials and issue a session token.

        Unknown usernames and wrong passwords fail identically.

        Returns:
            str: Signed token valid for one day

        Raises:
            AuthenticationError: If the credentials do not match
        """
        admin = await self.collection.find_one({"username": username})
        password_hash = admin.get(PASSWORD_HASH_FIELD) if admin else None

        if not verify_password(password, password_hash):
            metrics_collector.record_login(success=False)
            audit_log.warning("admin_login_failed", username=username)
            raise AuthenticationError(detail=INVALID_CREDENTIALS)

        metrics_collector.record_login(success=True)
        audit_log.info("admin_login_succeeded", username=username)
        return create_access_token(str(admin["_id"]), admin["username"])
