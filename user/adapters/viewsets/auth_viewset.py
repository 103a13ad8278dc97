import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from pms.exceptions import Conflict
from pms.jwt_auth import clear_auth_cookies, set_auth_cookies
from workspace.models import Workspace
from ..serializers.user_serializers import LoginSerializer, RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]  # applies to all actions in this viewset
    authentication_classes = []
    serializer_class = LoginSerializer

    @extend_schema(request=RegisterSerializer, responses={201: UserSerializer})
    @action(detail=False, methods=["post"])
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]

        if User.objects.filter(email__iexact=email).exists():
            raise Conflict("A user with this email already exists")

        try:
            with transaction.atomic():
                user = serializer.save()
                Workspace.objects.ensure_for_user(user)
        except IntegrityError:
            # Lost a race against a concurrent registration with the same email
            raise Conflict("A user with this email already exists")

        logger.info(f"Registered user {user.id} ({email})")
        return Response(
            {
                "message": "User created successfully",
                "user": UserSerializer(user, context={"request": request}).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    @action(detail=False, methods=["post"])
    def login_with_email(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"].strip().lower()
        password = serializer.validated_data["password"]

        find_user = User.objects.filter(email__iexact=email).first()
        user = None
        if find_user:
            user = authenticate(request, username=find_user.username, password=password)

        if not user:
            logger.info(f"Failed login for {email}")
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        # Tokens travel only as HttpOnly cookies, never in the body
        response = Response(
            {"user": UserSerializer(user, context={"request": request}).data},
            status=status.HTTP_200_OK,
        )
        return set_auth_cookies(response, user)

    @action(detail=False, methods=["post"])
    def logout(self, request):
        """
        Clear the HttpOnly auth cookies. Tokens are not blacklisted.
        """
        response = Response({"message": "Successfully logged out"}, status=status.HTTP_200_OK)
        return clear_auth_cookies(response)

    @extend_schema(responses={200: UserSerializer})
    @action(detail=False, methods=["get"])
    def session(self, request):
        return Response({"user": UserSerializer(request.user, context={"request": request}).data})


class NotificationViewSet(viewsets.ViewSet):
    """
    Notifications are not delivered yet; the endpoint exists so clients can poll it.
    """
    permission_classes = [IsAuthenticated]

    def list(self, request):
        return Response([])
