# yatra/auth_jwt.py
import logging
from typing import Optional, Tuple

from django.contrib.auth.models import User
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

log = logging.getLogger("yatra.auth")

ROLE_ADMIN = "admin"
ROLE_USER = "user"


def role_for(user: User) -> str:
    return ROLE_ADMIN if user.is_staff else ROLE_USER


def issue_token(user: User) -> str:
    """
    Access token for ``user`` (lifetime from SIMPLE_JWT). Carries ``email`` and
    ``role`` so clients can route without another request; the server only
    trusts the user row.
    """
    token = AccessToken.for_user(user)
    token["email"] = user.email or ""
    token["role"] = role_for(user)
    return str(token)


class BearerJWTAuthentication(JWTAuthentication):
    """simplejwt Bearer auth that logs why a token was refused."""

    def authenticate(self, request) -> Optional[Tuple[User, AccessToken]]:
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as e:
            log.warning("bearer token rejected: %s", getattr(e, "detail", e))
            raise
