"""
Peternak API Views

CRUD endpoints for program participants. Errors raised by PeternakStore
(ValidationError, ConflictError, NotFoundError, StoreError) are rendered by
DRF with their own status codes.
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import StatusKinerjaSerializer
from .services import PeternakStore


class PeternakListView(APIView):
    """
    GET /api/peternak/
    POST /api/peternak/

    List or register participants.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        data = PeternakStore.list_all()
        return Response({'results': data, 'count': len(data)})

    def post(self, request):
        peternak = PeternakStore.create(request.data)
        return Response(peternak, status=status.HTTP_201_CREATED)


class PeternakDetailView(APIView):
    """
    GET /api/peternak/{id}/
    PATCH /api/peternak/{id}/
    DELETE /api/peternak/{id}/
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, peternak_id):
        return Response(PeternakStore.get_by_id(peternak_id))

    def patch(self, request, peternak_id):
        return Response(PeternakStore.update(peternak_id, request.data))

    def delete(self, request, peternak_id):
        return Response(PeternakStore.delete(peternak_id))


class PeternakStatusKinerjaView(APIView):
    """
    PATCH /api/peternak/{id}/status-kinerja/

    Payload: {"status_kinerja": "Baik"}
    """
    permission_classes = [IsAuthenticated]

    def patch(self, request, peternak_id):
        serializer = StatusKinerjaSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    'error': 'Validation failed',
                    'code': 'validation_error',
                    'fields': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        result = PeternakStore.set_performance_status(
            peternak_id,
            serializer.validated_data['status_kinerja']
        )
        return Response(result)
