"""
Laporan Triwulan URLs
"""
from django.urls import path

from .views import LaporanDetailView, LaporanListView, LaporanSummaryView

app_name = 'laporan'

urlpatterns = [
    path('', LaporanListView.as_view(), name='laporan-list'),
    path('summary/', LaporanSummaryView.as_view(), name='laporan-summary'),
    path('<uuid:laporan_id>/', LaporanDetailView.as_view(), name='laporan-detail'),
]
