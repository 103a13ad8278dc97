from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from pms.jwt_auth import REFRESH_COOKIE, set_access_cookie


class CookieTokenRefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        refresh_cookie = request.COOKIES.get(REFRESH_COOKIE)
        if not refresh_cookie:
            return Response({"error": "Refresh token cookie missing"}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            refresh = RefreshToken(refresh_cookie)
        except TokenError:
            return Response({"error": "Invalid refresh token"}, status=status.HTTP_401_UNAUTHORIZED)

        res = Response({"message": "Token refreshed"}, status=status.HTTP_200_OK)
        return set_access_cookie(res, str(refresh.access_token))
