"""Credential checks for login."""

from protean.utils.globals import current_domain

from identity.domain import logger
from identity.user.user import User
from shared.errors import AuthenticationFailed

INVALID_CREDENTIALS = "Invalid Email or Password"


def authenticate(email, password) -> User:
    """Return the User owning these credentials, or raise ``AuthenticationFailed``.

    Unknown emails and wrong passwords produce the same message so the
    response does not reveal which accounts exist.
    """
    user = current_domain.repository_for(User).find_by_email(email or "")
    if user is None or not user.verify_password(password):
        logger.info("login_rejected")
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    logger.info("login_succeeded", user_id=str(user.id))
    return user
