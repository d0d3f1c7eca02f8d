"""
Identity lifecycle: caller resolution, registration, login, password reset
and profile updates
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from flask_login import current_user

from cakeshop.errors import Conflict, NotFound, Unauthorized, ValidationFailed
from cakeshop.models import User, UserRole

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = 'If the email exists, a reset link has been sent'


@dataclass(frozen=True)
class CallerIdentity:
    """The signed-in caller as seen by the services"""
    user_id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def from_user(cls, user: User) -> 'CallerIdentity':
        return cls(user_id=user.id, email=user.email, role=user.role)


def current_identity() -> Optional[CallerIdentity]:
    """Resolve the caller from the session cookie; ``None`` for anonymous callers"""
    if current_user.is_authenticated:
        return CallerIdentity.from_user(current_user)
    return None


def require_identity(identity: Optional[CallerIdentity]) -> CallerIdentity:
    if identity is None:
        raise Unauthorized()
    return identity


def require_admin(identity: Optional[CallerIdentity]) -> CallerIdentity:
    if identity is None or not identity.is_admin:
        raise Unauthorized()
    return identity


class AuthService:
    def __init__(self, session, reset_token_ttl: int = 3600):
        self.session = session
        self.reset_token_ttl = reset_token_ttl

    def _find_by_email(self, email) -> Optional[User]:
        return self.session.query(User).filter_by(email=email).first()

    def register(self, data) -> User:
        if self._find_by_email(data.email):
            raise Conflict('Email already registered')

        user = User(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=UserRole.CUSTOMER.value,
        )
        user.set_password(data.password)
        self.session.add(user)
        self.session.commit()

        logger.info(f'Registered user {user.id}')
        return user

    def authenticate(self, data) -> User:
        user = self._find_by_email(data.email)
        if user is None or not user.check_password(data.password):
            logger.warning(f'Login failed for {data.email}')
            raise Unauthorized('Invalid email or password')
        return user

    def request_password_reset(self, email) -> str:
        """Issue a reset token when the account exists; the reply never says whether it does"""
        user = self._find_by_email(email)
        if user is not None:
            user.reset_token = secrets.token_hex(32)
            user.reset_token_expiry = datetime.utcnow() + timedelta(seconds=self.reset_token_ttl)
            self.session.commit()
            # Stands in for the reset e-mail
            logger.info(f'Reset token for {email}: {user.reset_token}')
        return RESET_REQUESTED_MESSAGE

    def reset_password(self, data) -> User:
        user = self.session.query(User).filter_by(reset_token=data.token).first()
        if user is None or user.reset_token_expiry is None or user.reset_token_expiry < datetime.utcnow():
            raise ValidationFailed('Invalid or expired reset token')

        user.set_password(data.password)
        user.reset_token = None
        user.reset_token_expiry = None
        self.session.commit()

        logger.info(f'Password reset for user {user.id}')
        return user

    def get_profile(self, identity: Optional[CallerIdentity]) -> User:
        identity = require_identity(identity)
        user = self.session.get(User, identity.user_id)
        if user is None:
            raise NotFound('User not found')
        return user

    def update_profile(self, identity: Optional[CallerIdentity], data) -> User:
        user = self.get_profile(identity)

        taken = self.session.query(User).filter(User.email == data.email, User.id != user.id).first()
        if taken is not None:
            raise Conflict('Email already in use')

        user.first_name = data.first_name
        user.last_name = data.last_name
        user.email = data.email
        self.session.commit()
        return user
