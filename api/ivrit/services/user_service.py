"""
User service for business logic related to learner records.
"""
import logging
from sqlmodel import Session, select

from ivrit.core.exceptions import ConflictError, UserNotFound, ValidationError
from ivrit.models.models import User

logger = logging.getLogger(__name__)


def create_user(session: Session, username: str) -> User:
    """
    Register a learner.

    Raises:
        ValidationError: If the username is blank
        ConflictError: If the username is taken
    """
    username = (username or "").strip()
    if not username:
        raise ValidationError("username must not be empty")

    existing = session.exec(select(User).where(User.username == username)).first()
    if existing:
        raise ConflictError(f"Username {username!r} already exists")

    user = User(username=username)
    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info(f"Created user {user.id} ({user.username})")
    return user


def get_user(session: Session, user_id: int) -> User:
    """
    Raises:
        UserNotFound: If no user has this id
    """
    user = session.get(User, user_id)
    if not user:
        raise UserNotFound(user_id)
    return user
