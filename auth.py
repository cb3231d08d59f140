from typing import Optional

from database import get_user_by_credentials
from models import User


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Authenticate an account against the record store.

    Credentials are stored as given and matched exactly; no session or
    token is issued, callers keep the returned identity themselves.
    """
    if not email or not password:
        return None
    return get_user_by_credentials(email, password)
