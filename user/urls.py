from django.urls import path
from rest_framework.permissions import IsAuthenticated

from pms.jwt_auth import CookieJWTAuthentication
from .adapters.viewsets import auth_viewset
from .adapters.viewsets.auth_refresh import CookieTokenRefreshView

urlpatterns = [
    # registration with name/email/password
    path('auth/register', auth_viewset.AuthViewSet.as_view({'post': 'register'}), name='register'),
    # URL for logging in with email
    path('auth/login', auth_viewset.AuthViewSet.as_view({'post': 'login_with_email'}), name='login_email'),
    # URL for logging out
    path('auth/logout', auth_viewset.AuthViewSet.as_view({'post': 'logout'}), name='logout'),
    # current session user
    path('auth/session', auth_viewset.AuthViewSet.as_view(
        {'get': 'session'},
        permission_classes=[IsAuthenticated],
        authentication_classes=[CookieJWTAuthentication],
    ), name='session'),
    # refresh the access cookie from the refresh cookie
    path('auth/token/refresh', CookieTokenRefreshView.as_view(), name='token_refresh'),

    path('notifications', auth_viewset.NotificationViewSet.as_view({'get': 'list'}), name='notifications'),
]
