"""
Laporan URLs nested under one participant

Mounted at /api/peternak/<uuid:peternak_id>/laporan/
"""
from django.urls import path

from .views import NextQuarterView, PeternakLaporanView

app_name = 'peternak_laporan'

urlpatterns = [
    path('', PeternakLaporanView.as_view(), name='list'),
    path('next-quarter/', NextQuarterView.as_view(), name='next-quarter'),
]
