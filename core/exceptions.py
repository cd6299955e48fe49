"""
Program Error Types

Errors raised by the participant and report services. They are DRF
API exceptions, so an error that reaches a view unhandled is rendered as
``{"error": ..., "code": ...}`` with the matching HTTP status.
"""
from rest_framework import exceptions, status


class ProgramError(exceptions.APIException):
    """Base class for participant/report service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Permintaan tidak dapat diproses'
    default_code = 'program_error'

    def __init__(self, message=None, field=None):
        self.message = message or self.default_detail
        self.field = field

        detail = {'error': self.message, 'code': self.default_code}
        if field:
            detail['field'] = field
        super().__init__(detail=detail)

    def __str__(self):
        return self.message


class ValidationError(ProgramError):
    """A required field is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Data tidak valid'
    default_code = 'validation_error'


class ConflictError(ProgramError):
    """Duplicate NIK or duplicate report quarter."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Data sudah terdaftar'
    default_code = 'conflict'


class NotFoundError(ProgramError):
    """Unknown participant or report identifier."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Data tidak ditemukan'
    default_code = 'not_found'


class StoreError(ProgramError):
    """Opaque failure from the database layer."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Gagal mengakses penyimpanan data'
    default_code = 'store_error'
