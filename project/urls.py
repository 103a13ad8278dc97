from django.urls import path, include
from rest_framework.routers import DefaultRouter
from project.adapters.viewset.project_viewset import ProjectViewSet
from project.adapters.viewset.project_member_viewset import ProjectMemberViewSet


router = DefaultRouter(trailing_slash=False)
router.register(r'projects', ProjectViewSet, basename='project')

urlpatterns = [
    path(
        'projects/<int:pk>/members',
        ProjectMemberViewSet.as_view({'get': 'list', 'post': 'create', 'delete': 'remove'}),
        name='project-members',
    ),
    path('', include(router.urls)),
]
