"""
Laporan Triwulan API Views

Quarterly report endpoints. Creating and editing a report runs the request
through the report form (laporan.services.report_form) before anything is
written, so the API applies the same rules as the data-entry screen:

- the next quarter comes from the eligibility calculator, never the client
- the initial count of a new report is prefilled and cannot be overridden
- the current count is always derived from the four entered counts
"""
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ConflictError, ProgramError
from peternak.services import PeternakStore

from .models import LaporanTriwulan
from .serializers import (
    LaporanFormSerializer,
    LaporanSummarySerializer,
    LaporanTriwulanSerializer,
    NextQuarterSerializer,
)
from .services import LaporanStore
from .services.aggregates import summarize_reports
from .services.eligibility import calculate_prefill_data, get_next_allowed_quarter, last_report_of
from .services.laporan_store import PROGRAM_COMPLETE_MESSAGE
from .services.report_form import (
    FormPhase,
    apply_changes,
    loading_state,
    start_create,
    start_edit,
    submit,
    submit_failed,
    submit_succeeded,
)

logger = logging.getLogger(__name__)


def _form_input(request):
    """Sanitized form fields of the request, or a 400 response."""
    serializer = LaporanFormSerializer(data=request.data)
    if not serializer.is_valid():
        return None, Response(
            {
                'success': False,
                'error': 'Validation failed',
                'fields': serializer.errors
            },
            status=status.HTTP_400_BAD_REQUEST
        )
    return serializer.validated_data, None


def _submit_form(state, data, save, success_status):
    """
    Apply the request fields to an editable form, submit it and persist it.

    Args:
        state: EDITABLE LaporanFormState
        data: Sanitized form fields
        save: Callable taking the payload and returning the stored record
        success_status: HTTP status of a successful save
    """
    state = submit(apply_changes(state, data))
    if state.phase != FormPhase.SUBMITTING:
        return Response(
            {'success': False, 'errors': state.errors},
            status=status.HTTP_400_BAD_REQUEST
        )

    try:
        saved = save(state.result)
    except ProgramError as e:
        logger.warning(f"Saving report of peternak {state.peternak_id} failed: {e}")
        state = submit_failed(state, str(e))
        return Response(
            {'success': False, 'code': e.default_code, 'errors': state.errors},
            status=e.status_code
        )

    state = submit_succeeded(state, saved)
    return Response(state.result, status=success_status)


class NextQuarterView(APIView):
    """
    GET /api/peternak/{id}/laporan/next-quarter/

    The quarter the participant may report next, its period metadata, the
    existing reports and the values a new report starts from.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, peternak_id):
        peternak = PeternakStore.get_instance(peternak_id)
        next_quarter = get_next_allowed_quarter(peternak.id)

        prefill = None
        if next_quarter['can_create']:
            prefill = calculate_prefill_data(last_report_of(next_quarter), peternak.jumlah_ternak_awal)

        serializer = NextQuarterSerializer({**next_quarter, 'prefill': prefill})
        return Response(serializer.data)


class PeternakLaporanView(APIView):
    """
    GET /api/peternak/{id}/laporan/
    POST /api/peternak/{id}/laporan/

    POST payload (all counts as typed by the operator):
    {
        "jumlah_lahir": "2",
        "jumlah_mati": "1",
        "jumlah_dijual": "3",
        "tanggal_laporan": "2025-03-31",
        "kendala": "...",
        "solusi": "...",
        "keterangan": "..."
    }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, peternak_id):
        data = LaporanStore.list_for_peternak(peternak_id)
        return Response({'results': data, 'count': len(data)})

    def post(self, request, peternak_id):
        peternak = PeternakStore.get_by_id(peternak_id)

        data, error_response = _form_input(request)
        if error_response:
            return error_response

        state = start_create(
            loading_state(peternak_id),
            peternak,
            get_next_allowed_quarter(peternak_id)
        )
        if state.phase == FormPhase.INELIGIBLE:
            error = ConflictError(PROGRAM_COMPLETE_MESSAGE, field='quarter')
            return Response(error.detail, status=error.status_code)

        return _submit_form(state, data, LaporanStore.create, status.HTTP_201_CREATED)


class LaporanListView(generics.ListAPIView):
    """
    GET /api/laporan/

    Query Parameters:
    - peternak: Filter by participant id
    - quarter: Filter by quarter (1-8)
    - year: Filter by year
    - ordering: quarter, year, tanggal_laporan, created_at
    - page: Page number
    """
    permission_classes = [IsAuthenticated]
    serializer_class = LaporanTriwulanSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['peternak', 'quarter', 'year']
    ordering_fields = ['quarter', 'year', 'tanggal_laporan', 'created_at']
    ordering = ['peternak', 'quarter']
    queryset = LaporanTriwulan.objects.all()


class LaporanSummaryView(APIView):
    """
    GET /api/laporan/summary/

    Report count, latest quarter, current count and period totals per
    participant.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        summary = summarize_reports(LaporanTriwulan.objects.all())
        rows = [
            {'peternak_id': peternak_id, **values}
            for peternak_id, values in summary.items()
        ]
        data = LaporanSummarySerializer(rows, many=True).data
        return Response({'results': data, 'count': len(data)})


class LaporanDetailView(APIView):
    """
    GET /api/laporan/{id}/
    PUT /api/laporan/{id}/
    DELETE /api/laporan/{id}/

    PUT takes the same fields as report creation; the participant and the
    quarter of a report never change.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, laporan_id):
        return Response(LaporanStore.get_by_id(laporan_id))

    def put(self, request, laporan_id):
        report = LaporanStore.get_by_id(laporan_id)
        peternak = PeternakStore.get_by_id(report['peternak_id'])

        data, error_response = _form_input(request)
        if error_response:
            return error_response

        state = start_edit(loading_state(report['peternak_id']), report, peternak)

        def save(payload):
            return LaporanStore.update(laporan_id, payload)

        return _submit_form(state, data, save, status.HTTP_200_OK)

    def delete(self, request, laporan_id):
        return Response(LaporanStore.delete(laporan_id))
