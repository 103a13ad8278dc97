from django.urls import path

from .adapters.viewsets.dashboard_stats_viewset import DashboardViewset

urlpatterns = [
    path('dashboard/stats', DashboardViewset.as_view({'get': 'stats'}), name='dashboard-stats'),
]
