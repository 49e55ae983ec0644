from django.urls import path

from apps.ledger.api.v1.views import DashboardView

urlpatterns = [
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
]
