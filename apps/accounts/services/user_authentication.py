"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


def _find_user_for_login(email: str):
    """
    Locked lookup of the account behind a login email.

    Registration rejects case variants, but accounts created elsewhere
    (createsuperuser, admin) may still differ only in case. An exact
    match wins over a case-insensitive one.
    """
    candidates = User.objects.select_for_update().filter(email__iexact=email).order_by('created_at')
    exact = None
    first = None
    for candidate in candidates:
        if first is None:
            first = candidate
        if candidate.email == email:
            exact = candidate
            break
    return exact or first


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check a customer's or admin's credentials and stamp last_login.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Account is deactivated
    """
    user = _find_user_for_login(email)

    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
