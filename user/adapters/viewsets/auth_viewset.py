import logging

from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated

from projectflow.jwt_auth import issue_access_token
from utils.response import error_response, success_response
from ..serializers.user_serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    UpdateMeSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AuthViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]  # applies to all actions in this viewset
    authentication_classes = []
    serializer_class = LoginSerializer

    @extend_schema(request=RegisterSerializer, responses={201: UserSerializer})
    @action(detail=False, methods=["post"])
    def register(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered user {user.id} ({user.username})")
        return success_response(
            "Registration successful",
            {"user": UserSerializer(user).data, "token": issue_access_token(user)},
            status.HTTP_201_CREATED,
        )

    @extend_schema(request=LoginSerializer, responses={200: UserSerializer})
    @action(detail=False, methods=["post"])
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # Unknown username and wrong password answer the same way
        user = authenticate(
            request,
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
        )
        if not user:
            logger.info(f"Failed login for username {serializer.validated_data['username']!r}")
            return error_response(INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)

        return success_response(
            "Login successful",
            {"user": UserSerializer(user).data, "token": issue_access_token(user)},
        )


class MeViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(responses={200: UserSerializer})
    def me(self, request):
        return success_response("User fetched successfully", {"user": UserSerializer(request.user).data})

    @extend_schema(request=UpdateMeSerializer, responses={200: UserSerializer})
    def update_me(self, request):
        serializer = UpdateMeSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return success_response("User updated successfully", {"user": UserSerializer(user).data})

    @extend_schema(request=ChangePasswordSerializer, responses={200: None})
    def change_password(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info(f"User {request.user.id} changed password")
        return success_response("Password changed successfully")
