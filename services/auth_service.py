# services/auth_service.py
import logging
from typing import Any, Dict, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from domain.models.user import User, UserProfile
from middleware.errors import DuplicateRecordError, ValidationError
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def authenticate(email: str, password: str) -> Optional[UserProfile]:
    """Return the user's public profile if email/password are valid; otherwise None."""
    repo = UserRepository()
    user = repo.get_by_email(email or "")
    if not user or not user.password:
        return None
    if not check_password_hash(user.password, password or ""):
        return None
    return user.to_profile()


def register_user(data: Dict[str, Any]) -> UserProfile:
    """Create a new user with a hashed password. Raises on duplicate email."""
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email:
        raise ValidationError("Email is required.", details={"field": "email"})
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
            details={"field": "password"},
        )

    repo = UserRepository()
    if repo.get_by_email(email):
        raise DuplicateRecordError("Email address already registered.")

    fields = {
        "name": data.get("name"),
        "email": email,
        "image": data.get("image"),
        "password": generate_password_hash(password),
    }
    if data.get("accountType"):
        fields["account_type"] = data["accountType"]
    user = User(**fields)

    user_id = repo.create(user)
    logger.info("Registered %s account %s", user.account_type, user_id)
    return user.model_copy(update={"id": user_id}).to_profile()
