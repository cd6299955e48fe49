"""
Peternak URLs
"""
from django.urls import include, path

from .views import PeternakDetailView, PeternakListView, PeternakStatusKinerjaView

app_name = 'peternak'

urlpatterns = [
    path('', PeternakListView.as_view(), name='peternak-list'),
    path('<uuid:peternak_id>/', PeternakDetailView.as_view(), name='peternak-detail'),
    path('<uuid:peternak_id>/status-kinerja/', PeternakStatusKinerjaView.as_view(), name='status-kinerja'),

    # Quarterly reports of one participant
    path('<uuid:peternak_id>/laporan/', include('laporan.peternak_urls')),
]
