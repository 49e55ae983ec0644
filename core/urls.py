from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/exchange/', include('apps.exchange.api.v1.urls')),
    path('api/v1/ledger/', include('apps.ledger.api.v1.urls')),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
]
