from django.urls import path, include
from rest_framework.routers import DefaultRouter
from task.adapters.viewset.task_viewset import TaskViewSet
from task.adapters.viewset.comment_viewset import CommentViewSet

router = DefaultRouter(trailing_slash=False)
router.register(r'tasks', TaskViewSet, basename='task')

urlpatterns = [
    path('comments/<int:pk>', CommentViewSet.as_view({'delete': 'destroy'}), name='comment-detail'),
    path('', include(router.urls)),
]
