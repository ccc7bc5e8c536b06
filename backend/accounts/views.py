"""
API views for account registration and the requester's own profile.

Login and token issuance are left to Django's session and basic
authentication.
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import RegisterSerializer, UserProfileSerializer

logger = logging.getLogger(__name__)


@extend_schema(
    summary="Register a user",
    request=RegisterSerializer,
    responses={201: UserProfileSerializer},
    tags=['Accounts']
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register_user(request: Request) -> Response:
    """
    Create a new account.

    POST /api/auth/register/
    """
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info("Registered user %s with role %s", user.pk, user.role)
    return Response(UserProfileSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Read or update the requester's profile",
    request=UserProfileSerializer,
    responses={200: UserProfileSerializer},
    tags=['Accounts']
)
@api_view(['GET', 'PUT'])
def user_profile(request: Request) -> Response:
    """
    GET /api/auth/profile/
    PUT /api/auth/profile/
    """
    if request.method == 'GET':
        return Response(UserProfileSerializer(request.user).data)

    serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    logger.info("User %s updated their profile", user.pk)
    return Response(UserProfileSerializer(user).data)
