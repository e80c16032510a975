from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_phone_number
from ..core.constants import DEFAULT_RESET_TOKEN_MAX_AGE, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..mail.mailer import Mailer
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)

RESET_SALT = "password-reset"


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user as seen by controllers and templates."""

    user_id: int
    full_name: str
    email: str
    role: Role

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    @classmethod
    def from_profile(cls, profile: Profile) -> "SessionUser":
        return cls(user_id=profile.id, full_name=profile.full_name, email=profile.email, role=profile.role)


def _hash_fingerprint(profile: Profile) -> str:
    return (profile.password_hash or "")[-16:]


def _require_matching_passwords(password: str, confirm_password: str) -> str:
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    return require_min_length(password, "Password", MIN_PASSWORD_LENGTH)


class AuthService:
    """Use cases: sign in/up, session lookup, password reset."""

    def __init__(
        self,
        profiles: ProfileRepository,
        *,
        secret_key: str,
        mailer: Mailer,
        reset_token_max_age: int = DEFAULT_RESET_TOKEN_MAX_AGE,
    ):
        self._profiles = profiles
        self._mailer = mailer
        self._serializer = URLSafeTimedSerializer(secret_key, salt=RESET_SALT)
        self._reset_token_max_age = int(reset_token_max_age)

    def sign_in(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        profile = self._profiles.get_by_email(email) if email else None
        if not profile:
            logger.info("Sign-in failed for unknown email %s", email)
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("Sign-in failed for %s", email)
            raise AuthenticationError("Invalid login credentials")

        logger.info("User %s signed in", profile.id)
        return SessionUser.from_profile(profile)

    def sign_up(
        self,
        *,
        email: str,
        password: str,
        confirm_password: str,
        full_name: str,
        phone: str,
    ) -> int:
        # Validation happens before any store call.
        password = _require_matching_passwords(password, confirm_password)
        phone = require_phone_number(phone)
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Please enter a valid email address")

        if self._profiles.get_by_email(email):
            raise ValidationError("User already registered")

        user_id = self._profiles.create_profile(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name,
            phone=phone,
            role=Role.EMPLOYEE,
        )
        logger.info("Registered user %s", user_id)
        return user_id

    def get_session(self, user_id: Optional[int]) -> Optional[SessionUser]:
        if not user_id:
            return None
        profile = self._profiles.get_by_id(int(user_id))
        return SessionUser.from_profile(profile) if profile else None

    def make_reset_token(self, profile: Profile) -> str:
        # The fingerprint stops matching once the password changes.
        return self._serializer.dumps({"uid": int(profile.id), "pwd": _hash_fingerprint(profile)})

    def request_password_reset(self, email: str, *, reset_url_builder: Callable[[str], str]) -> None:
        """Send a reset link if the address is known.

        Unknown addresses get the same outward result so the form does not
        reveal which e-mails are registered.
        """
        email = require_non_empty(email, "Email").lower()
        profile = self._profiles.get_by_email(email)
        if not profile:
            logger.info("Password reset requested for unknown email %s", email)
            return

        link = reset_url_builder(self.make_reset_token(profile))
        self._mailer.send(
            to=profile.email,
            subject="Reset your password",
            body=(
                f"Hello {profile.full_name},\n\n"
                f"Use the link below to choose a new password:\n{link}\n\n"
                "If you did not ask for this, you can ignore this e-mail."
            ),
        )
        logger.info("Password reset link issued for user %s", profile.id)

    def verify_reset_token(self, token: str) -> int:
        try:
            data = self._serializer.loads(token or "", max_age=self._reset_token_max_age)
        except SignatureExpired:
            raise AuthenticationError("Password reset link has expired")
        except BadSignature:
            raise AuthenticationError("Password reset link is invalid")

        user_id = int(data.get("uid") or 0)
        profile = self._profiles.get_by_id(user_id) if user_id else None
        if not profile or data.get("pwd") != _hash_fingerprint(profile):
            raise AuthenticationError("Password reset link is invalid")
        return user_id

    def update_password(self, *, user_id: int, new_password: str, confirm_password: str) -> None:
        new_password = _require_matching_passwords(new_password, confirm_password)
        if not self._profiles.update_password_hash(int(user_id), generate_password_hash(new_password)):
            raise AuthenticationError("Authentication session expired")
        logger.info("Password updated for user %s", user_id)


class ProfileService:
    """Use cases: settings page profile edit."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, user_id: int) -> Optional[Profile]:
        return self._profiles.get_by_id(int(user_id))

    def update_full_name(self, user_id: int, full_name: str) -> None:
        full_name = require_non_empty(full_name, "Full name")
        if not self._profiles.update_full_name(int(user_id), full_name):
            raise ValidationError("Profile not found")
