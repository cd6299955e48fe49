"""
Laporan Store

Persists report payloads assembled by the report form.

Creation only accepts the quarter the eligibility calculator allows, so the
quarters of a participant stay contiguous from 1 to 8. Concurrent creations
for the same participant are serialized by locking the participant row, and
the unique (peternak, quarter) constraint rejects anything that still slips
through.
"""

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from laporan.models import LaporanTriwulan, MAX_QUARTER
from laporan.serializers import LaporanTriwulanSerializer
from peternak.models import Peternak
from peternak.services import PeternakStore

from .eligibility import compute_next_quarter
from .report_form import DATE_FUTURE_MESSAGE, LOGIC_ERROR, LOGIC_MESSAGE, calculate_current_count

logger = logging.getLogger(__name__)


NOT_FOUND_MESSAGE = 'Data laporan tidak ditemukan'
DUPLICATE_QUARTER_MESSAGE = 'Laporan untuk triwulan ini sudah ada'
PROGRAM_COMPLETE_MESSAGE = f'Program peternak sudah selesai (maksimal {MAX_QUARTER} triwulan)'
CURRENT_MISMATCH_MESSAGE = 'Jumlah saat ini harus sama dengan awal + lahir - mati - dijual'

# Fields a payload may not change on an existing report
IMMUTABLE_FIELDS = ('id', 'peternak_id', 'quarter')


@contextmanager
def _store_errors(action, writes_quarter=False):
    """Only a new report can collide on (peternak, quarter)."""
    try:
        yield
    except IntegrityError as e:
        logger.warning(f"Integrity error while {action}: {str(e)}")
        if writes_quarter:
            raise ConflictError(DUPLICATE_QUARTER_MESSAGE, field='quarter') from e
        raise ValidationError() from e
    except DatabaseError as e:
        logger.error(f"Error {action}: {str(e)}")
        raise StoreError() from e


def check_balance(values, today=None):
    """
    Re-check the livestock balance of a report before it is written.

    Args:
        values: Mapping with the report's count fields and tanggal_laporan
    """
    today = today or timezone.localdate()

    awal = values['jumlah_ternak_awal']
    lahir = values['jumlah_lahir']
    mati = values['jumlah_kematian']
    terjual = values['jumlah_terjual']

    if mati + terjual > awal:
        raise ValidationError(LOGIC_MESSAGE, field=LOGIC_ERROR)

    if values['jumlah_ternak_saat_ini'] != calculate_current_count(awal, lahir, mati, terjual):
        raise ValidationError(CURRENT_MISMATCH_MESSAGE, field='jumlah_ternak_saat_ini')

    if values['tanggal_laporan'] > today:
        raise ValidationError(DATE_FUTURE_MESSAGE, field='tanggal_laporan')


class LaporanStore:
    """
    CRUD over quarterly reports.

    Usage:
        record = LaporanStore.create(payload)
        LaporanStore.update(record['id'], edited_payload)
    """

    @classmethod
    def create(cls, payload, today=None):
        """
        Store a new report for the participant in ``payload['peternak_id']``.

        Raises:
            NotFoundError: Unknown participant
            ValidationError: Invalid field or broken balance
            ConflictError: Cycle complete, or the quarter is not the next allowed one
        """
        peternak = PeternakStore.get_instance(payload.get('peternak_id'))
        data = {key: value for key, value in payload.items() if key not in ('id', 'peternak_id')}

        serializer = LaporanTriwulanSerializer(data=data)
        cls._validate(serializer)
        check_balance(serializer.validated_data, today=today)

        with _store_errors('creating laporan', writes_quarter=True):
            with transaction.atomic():
                # Lock the participant so two creations cannot both see the same next quarter
                Peternak.objects.select_for_update().filter(id=peternak.id).first()

                reports = LaporanTriwulan.objects.filter(peternak=peternak)
                next_quarter = compute_next_quarter(peternak.tanggal_daftar, reports, today=today)

                if not next_quarter['can_create']:
                    raise ConflictError(PROGRAM_COMPLETE_MESSAGE, field='quarter')

                quarter = serializer.validated_data['quarter']
                if quarter != next_quarter['quarter_number']:
                    raise ConflictError(
                        f"Triwulan {quarter} tidak dapat dibuat, "
                        f"triwulan berikutnya adalah {next_quarter['quarter_number']}",
                        field='quarter'
                    )

                laporan = serializer.save(peternak=peternak)

        logger.info(f"Laporan {laporan.display_period} created for peternak {peternak.id}")
        return serializer.data

    @classmethod
    def update(cls, laporan_id, payload, today=None):
        """Edit a report in place; participant and quarter stay unchanged."""
        laporan = cls.get_instance(laporan_id)
        data = {key: value for key, value in payload.items() if key not in IMMUTABLE_FIELDS}

        serializer = LaporanTriwulanSerializer(laporan, data=data, partial=True)
        cls._validate(serializer)

        merged = {
            field: serializer.validated_data.get(field, getattr(laporan, field))
            for field in (
                'jumlah_ternak_awal', 'jumlah_lahir', 'jumlah_kematian',
                'jumlah_terjual', 'jumlah_ternak_saat_ini', 'tanggal_laporan'
            )
        }
        check_balance(merged, today=today)

        with _store_errors('updating laporan'):
            with transaction.atomic():
                serializer.save()

        logger.info(f"Laporan {laporan.id} updated")
        return serializer.data

    @classmethod
    def get_by_id(cls, laporan_id):
        return LaporanTriwulanSerializer(cls.get_instance(laporan_id)).data

    @classmethod
    def get_instance(cls, laporan_id):
        with _store_errors('getting laporan by id'):
            try:
                return LaporanTriwulan.objects.select_related('peternak').get(id=laporan_id)
            except (LaporanTriwulan.DoesNotExist, DjangoValidationError):
                raise NotFoundError(NOT_FOUND_MESSAGE)

    @classmethod
    def list_for_peternak(cls, peternak_id):
        """Reports of one participant ordered by quarter."""
        peternak = PeternakStore.get_instance(peternak_id)
        with _store_errors('listing laporan'):
            queryset = LaporanTriwulan.objects.filter(peternak=peternak).order_by('quarter')
            return list(LaporanTriwulanSerializer(queryset, many=True).data)

    @classmethod
    def list_all(cls):
        with _store_errors('listing laporan'):
            queryset = LaporanTriwulan.objects.order_by('peternak_id', 'quarter')
            return list(LaporanTriwulanSerializer(queryset, many=True).data)

    @classmethod
    def delete(cls, laporan_id):
        """
        Remove a report.

        Only the latest quarter of a participant may be removed so the
        remaining quarters stay contiguous.
        """
        laporan = cls.get_instance(laporan_id)

        with _store_errors('deleting laporan'):
            with transaction.atomic():
                later = LaporanTriwulan.objects.filter(
                    peternak_id=laporan.peternak_id,
                    quarter__gt=laporan.quarter
                ).exists()
                if later:
                    raise ConflictError('Hanya laporan triwulan terakhir yang dapat dihapus')
                laporan.delete()

        logger.info(f"Laporan {laporan_id} deleted")
        return {'success': True}

    @staticmethod
    def _validate(serializer):
        if serializer.is_valid():
            return

        field, messages = next(iter(serializer.errors.items()))
        message = messages[0] if isinstance(messages, list) else messages
        logger.error(f"Invalid laporan field {field}: {message}")
        raise ValidationError(f"Field {field} tidak valid: {message}", field=field)
