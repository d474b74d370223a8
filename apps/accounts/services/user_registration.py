"""User registration service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str = "",
    address: str = ""
) -> User:
    """
    Register a new customer account.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        name: Optional full name
        address: Optional default delivery address

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already taken
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError(f"An account with email {email} already exists")

    user = User.objects.create_user(
        email=email,
        password=password,
        name=name,
        address=address
    )

    logger.info("Registered customer %s", user.id)
    return user
