"""User management utilities.

This module provides user management functionality including user storage,
password hashing, authentication and profile updates.
"""

import logging
from datetime import datetime
from typing import List, Optional

import bcrypt
import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import USER_ROLES
from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from models.user import UserModel
from schemas.user import User
from utils.converters import model_to_user, user_to_model
from utils.skill_matcher import normalize_skills

logger = logging.getLogger(__name__)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS = 12


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        # bcrypt only looks at the first 72 bytes
        password_bytes = password.encode("utf-8")[:72]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:72]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: str,
    ) -> User:
        """Create a new user.

        Args:
            name: Display name.
            email: Login email, unique across users.
            password: Plain text password.
            role: 'student' or 'admin'.

        Returns:
            Created User object.

        Raises:
            InvalidInputError: If a field is blank or the role is unknown.
            ConflictError: If the email is already registered.
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password or not role:
            raise InvalidInputError("All fields are required")
        if role not in USER_ROLES:
            raise InvalidInputError(
                f"Invalid role: {role}. Must be 'student' or 'admin'."
            )

        existing = self.db.query(UserModel).filter(UserModel.email == email).first()
        if existing:
            raise ConflictError("Email already registered")

        user = User(
            name=name,
            email=email,
            password_hash=self.hash_password(password),
            role=role,
        )

        # Two concurrent registrations may both pass the check above; the
        # unique index on email catches the loser.
        try:
            self.db.add(user_to_model(user))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email already registered") from e

        logger.info("Created user %s with role %s", user.user_id, role)
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, else None."""
        user = self.get_user_by_email(email)
        if user is None:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email.

        Args:
            email: Email to look up (case-insensitive).

        Returns:
            User object if found, None otherwise.
        """
        model = (
            self.db.query(UserModel)
            .filter(UserModel.email == (email or "").strip().lower())
            .first()
        )
        if model:
            return model_to_user(model)
        return None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model:
            return model_to_user(model)
        return None

    def list_students(self, exclude_user_id: Optional[str] = None) -> List[User]:
        """List students in registration order, optionally excluding one."""
        query = self.db.query(UserModel).filter(UserModel.role == "student")
        if exclude_user_id:
            query = query.filter(UserModel.user_id != exclude_user_id)
        models = query.order_by(UserModel.created_at.asc(), UserModel.user_id.asc()).all()
        return [model_to_user(m) for m in models]

    def update_profile(
        self,
        user_id: str,
        skills: Optional[List[str]] = None,
        availability: Optional[str] = None,
    ) -> User:
        """Update the holder's own skills and/or availability.

        Fields left as None are not touched.

        Raises:
            NotFoundError: If the user does not exist.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if not model:
            raise NotFoundError("User", user_id)

        if skills is not None:
            model.skills = normalize_skills(skills)
        if availability is not None:
            model.availability = availability.strip()
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated profile for user %s", user_id)
        return model_to_user(model)
