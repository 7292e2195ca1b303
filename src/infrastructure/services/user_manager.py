"""Identity store backed by the user repository.

Implements `IUserManager`: account creation with password policy
enforcement, role membership and bcrypt password verification.
"""

from typing import List, Optional

from structlog import get_logger

from src.core.exceptions import ValidationError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import DUPLICATE_EMAIL, IdentityResult, IUserManager
from src.domain.services.auth.password_policy import PasswordPolicyValidator
from src.utils.security import hash_password, verify_password

logger = get_logger(__name__)


class UserManager(IUserManager):
    """Concrete identity store used by the token lifecycle service.

    Rejections (weak password, taken email) come back as a failed
    `IdentityResult`; storage faults propagate as `DatabaseError`.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_policy: Optional[PasswordPolicyValidator] = None,
    ):
        self.user_repository = user_repository
        self.password_policy = password_policy or PasswordPolicyValidator()

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.user_repository.get_by_email(email)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.user_repository.get_by_id(user_id)

    async def create(self, user: User, password: str) -> IdentityResult:
        """Validates the password, hashes it and persists the user.

        Every unmet password rule is reported, not only the first one.
        """
        reasons = self.password_policy.violations(password)
        if reasons:
            logger.info("User creation rejected by password policy", failed_rules=len(reasons))
            return IdentityResult.failed(*reasons)

        user.email = (user.email or "").strip().lower()
        if await self.user_repository.get_by_email(user.email) is not None:
            return IdentityResult.failed("User with this email already exists.", code=DUPLICATE_EMAIL)

        user.hashed_password = hash_password(password)
        try:
            await self.user_repository.save(user)
        except ValidationError as e:
            return IdentityResult.failed(e.message, code=e.code)

        logger.info("User created", user_id=user.id)
        return IdentityResult.success()

    async def add_to_role(self, user: User, role: str) -> IdentityResult:
        if user.id is None:
            return IdentityResult.failed("User must be saved before it can join a role.")
        if not role or not role.strip():
            return IdentityResult.failed("Role name cannot be empty.")

        await self.user_repository.add_role(user.id, role.strip())
        return IdentityResult.success()

    async def get_roles(self, user: User) -> List[str]:
        if user.id is None:
            return []
        return await self.user_repository.get_roles(user.id)

    async def check_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.hashed_password)
