from django.urls import path

from meeting.adapters.viewset.meeting_viewset import MeetingViewSet

urlpatterns = [
    path('meetings', MeetingViewSet.as_view({'get': 'list', 'post': 'create'}), name='meetings'),
]
