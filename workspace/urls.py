from django.urls import path, include
from rest_framework.routers import DefaultRouter

from workspace.adapters.viewsets.workspace_viewset import WorkspaceViewSet

router = DefaultRouter(trailing_slash=False)
router.register(r'workspaces', WorkspaceViewSet, basename='workspace')

urlpatterns = [
    path('user/ensure-workspace', WorkspaceViewSet.as_view({'post': 'ensure_workspace'}), name='ensure-workspace'),
    path('', include(router.urls)),
]
