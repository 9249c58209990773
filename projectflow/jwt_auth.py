"""
Bearer-token authentication for the API.

Tokens are read from the ``Authorization: Bearer <token>`` header and verified
with simplejwt. Every failure is reported with a short, uniform message so the
client can't tell a forged token from an expired one.
"""

import logging
from typing import Optional, Tuple

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed as TokenAuthenticationFailed, InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


class BearerJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that only looks at the Authorization header.

    A request without the header is anonymous (the permission layer then answers
    401). A request with a bad token or a token for a deleted user fails
    authentication outright.
    """

    def authenticate(self, request: HttpRequest) -> Optional[Tuple]:
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        try:
            validated_token = self.get_validated_token(raw_token)
        except InvalidToken:
            logger.info(f"Rejected access token on {request.path}")
            raise AuthenticationFailed("Invalid access token", code="token_not_valid")

        return self.get_user(validated_token), validated_token

    def get_user(self, validated_token):
        try:
            return super().get_user(validated_token)
        except (InvalidToken, TokenAuthenticationFailed):
            raise AuthenticationFailed("User not found", code="user_not_found")

    def authenticate_header(self, request: HttpRequest) -> str:
        return 'Bearer'


def issue_access_token(user) -> str:
    """Sign an access token for ``user``; the username rides along as a claim."""
    token = AccessToken.for_user(user)
    token['username'] = user.username
    return str(token)
