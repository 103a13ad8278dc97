from django.urls import path

from time_tracking.adapters.viewset.time_entry_viewset import TimeEntryViewSet
from time_tracking.adapters.viewset.timer_viewset import TimerViewSet

urlpatterns = [
    path('tasks/<int:pk>/time-entries', TimeEntryViewSet.as_view({'get': 'task_entries', 'post': 'create'}), name='task-time-entries'),
    path('tasks/<int:pk>/time-summary', TimeEntryViewSet.as_view({'get': 'summary'}), name='task-time-summary'),
    path('time-entries', TimeEntryViewSet.as_view({'get': 'list'}), name='time-entries'),
    path('time-entries/<int:pk>', TimeEntryViewSet.as_view({'delete': 'destroy'}), name='time-entry-detail'),

    path('tasks/<int:pk>/timer/start', TimerViewSet.as_view({'post': 'start'}), name='timer-start'),
    path('timer', TimerViewSet.as_view({'get': 'current', 'delete': 'discard'}), name='timer'),
    path('timer/stop', TimerViewSet.as_view({'post': 'stop'}), name='timer-stop'),
]
