"""
JWT authentication that reads tokens from cookies instead of Authorization headers.
"""

from django.conf import settings
from django.http import HttpRequest
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import RefreshToken
from typing import Tuple, Optional

ACCESS_COOKIE = 'access_token'
REFRESH_COOKIE = 'refresh_token'


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the HttpOnly ``access_token`` cookie.
    Falls back to the Authorization header (testing tools, mobile apps).
    """

    def authenticate(self, request: HttpRequest) -> Optional[Tuple]:
        access_token = request.COOKIES.get(ACCESS_COOKIE)

        if access_token is None:
            return super().authenticate(request)

        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token

    def authenticate_header(self, request: HttpRequest) -> str:
        """
        Value of the `WWW-Authenticate` header on a `401 Unauthenticated` response.
        """
        return 'Bearer'


def _set_cookie(response, key, value, max_age):
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        secure=settings.AUTH_COOKIE_SECURE,
        httponly=True,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        path='/',
        domain=settings.AUTH_COOKIE_DOMAIN,
    )


def set_auth_cookies(response, user):
    """Issue a fresh token pair for ``user`` and attach it to ``response`` as cookies."""
    refresh = RefreshToken.for_user(user)
    lifetimes = settings.SIMPLE_JWT
    _set_cookie(response, ACCESS_COOKIE, str(refresh.access_token),
                int(lifetimes['ACCESS_TOKEN_LIFETIME'].total_seconds()))
    _set_cookie(response, REFRESH_COOKIE, str(refresh),
                int(lifetimes['REFRESH_TOKEN_LIFETIME'].total_seconds()))
    return response


def set_access_cookie(response, access_token):
    _set_cookie(response, ACCESS_COOKIE, access_token,
                int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()))
    return response


def clear_auth_cookies(response):
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key,
            path='/',
            domain=settings.AUTH_COOKIE_DOMAIN,
            samesite=settings.AUTH_COOKIE_SAMESITE,
        )
    return response
