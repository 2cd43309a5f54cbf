"""Login, token refresh and user registration"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.config import settings
from orderdesk.core.constants import ROLES, Role, Status
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import AuthMessages, NotFoundMessages, OperationMessages, ValidationMessages
from orderdesk.core.security import create_access_token, get_password_hash, token_payload, verify_password
from orderdesk.models import User
from orderdesk.repositories.customer_repository import CustomerRepository
from orderdesk.repositories.user_repository import UserRepository
from orderdesk.schemas.auth import RegisterRequest
from orderdesk.services import validation
from orderdesk.services.result import CONFLICT, FORBIDDEN, NOT_FOUND, UNAUTHORIZED, ServiceResult

logger = get_logger(__name__)


def user_lookup_code(email: str) -> str:
    """``jane.doe@acme.com`` -> ``JANE.DOE``"""
    return email.split("@")[0].upper()


async def unique_user_lookup_code(users: UserRepository, email: str, reserved=()) -> str:
    base = user_lookup_code(email)
    taken = set(await users.lookup_codes_like(base)) | set(reserved)
    if base not in taken:
        return base
    suffix = 2
    while f"{base}{suffix}" in taken:
        suffix += 1
    return f"{base}{suffix}"


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)

    async def login(self, email: str, password: str) -> ServiceResult:
        user = await self.users.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password):
            logger.warning(f"Failed login for {email}")
            return ServiceResult.fail(AuthMessages.INVALID_CREDENTIALS, UNAUTHORIZED)
        if user.status != Status.ACTIVE:
            logger.warning(f"Inactive user attempted login: {email}")
            return ServiceResult.fail(AuthMessages.ACCOUNT_INACTIVE, FORBIDDEN)

        logger.info(f"User logged in: {user.email} ({user.role})")
        return ServiceResult.ok({"token": create_access_token(token_payload(user)), "user": user})

    async def get_user(self, user_id: int) -> ServiceResult:
        user = await self.users.get(user_id)
        if user is None:
            return ServiceResult.fail(NotFoundMessages.USER, NOT_FOUND)
        return ServiceResult.ok(user)

    async def refresh(self, user_id: int) -> ServiceResult:
        """New token built from the stored user, so role/status changes apply"""
        user = await self.users.get(user_id)
        if user is None:
            return ServiceResult.fail(NotFoundMessages.USER, NOT_FOUND)
        if user.status != Status.ACTIVE:
            return ServiceResult.fail(AuthMessages.USER_INACTIVE, FORBIDDEN)
        return ServiceResult.ok({"token": create_access_token(token_payload(user))})

    async def register(self, data: RegisterRequest, created_by: Optional[int] = None) -> ServiceResult:
        errors = []
        email = (data.email or "").strip().lower()
        validation.check_email(errors, email, required=True)
        validation.check_password(errors, data.password)
        role = data.role or Role.CLIENT
        if role not in ROLES:
            errors.append(ValidationMessages.INVALID_ROLE)
        validation.check_status(errors, data.status)
        if data.customer_id is not None and await CustomerRepository(self.db).get(data.customer_id) is None:
            errors.append(NotFoundMessages.CUSTOMER)
        if errors:
            return ServiceResult.invalid(errors)

        if await self.users.get_by_email(email) is not None:
            return ServiceResult.fail(AuthMessages.USER_EXISTS, CONFLICT)

        try:
            user = self.users.add(User(
                email=email,
                password=get_password_hash(data.password),
                role=role,
                customer_id=data.customer_id,
                lookup_code=await unique_user_lookup_code(self.users, email),
                status=data.status or Status.ACTIVE,
                created_by=created_by,
                modified_by=created_by,
            ))
            await self.db.commit()
            await self.db.refresh(user)
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to register {email}: {e}")
            return ServiceResult.fail(OperationMessages.CREATE_FAILED)

        logger.info(f"Registered user {user.email} ({user.role})")
        return ServiceResult.ok(user)


async def ensure_admin(db: AsyncSession) -> bool:
    """Create the bootstrap admin when missing. Returns True when created."""
    users = UserRepository(db)
    email = settings.FIRST_ADMIN_EMAIL.strip().lower()
    if await users.get_by_email(email) is not None:
        return False
    users.add(User(
        email=email,
        password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
        role=Role.ADMIN,
        lookup_code=user_lookup_code(email),
        status=Status.ACTIVE,
    ))
    await db.commit()
    return True
