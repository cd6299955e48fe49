"""
URL configuration for the livestock program backend.

API layout:
    /api/auth/token/             JWT login
    /api/auth/token/refresh/     JWT refresh
    /api/peternak/               Participants (and their quarterly reports)
    /api/laporan/                Quarterly reports across participants
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

auth_urlpatterns = [
    path('token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
]

urlpatterns = [
    path('', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api/auth/', include(auth_urlpatterns)),
    path('api/peternak/', include('peternak.urls')),  # Participants + nested reports
    path('api/laporan/', include('laporan.urls')),  # Reports, filters and summary
]
