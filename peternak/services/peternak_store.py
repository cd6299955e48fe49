"""
Peternak Store

Data-access layer for program participants. Every operation validates its
input, runs as one atomic unit against the database and returns plain
serialized records (dicts) tagged with the participant id.

NIK uniqueness is checked before writing so the caller gets a readable
error, and is also guaranteed by the unique index on ``Peternak.nik``:
a concurrent duplicate that slips past the check surfaces as an
IntegrityError and is reported as the same ConflictError.
"""

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from peternak.models import Peternak
from peternak.serializers import PeternakSerializer, StatusKinerjaSerializer

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = [
    'nama_lengkap',
    'nik',
    'alamat',
    'nomor_telepon',
    'jenis_kelamin',
    'status_siklus',
    'tanggal_daftar',
    'jumlah_ternak_awal',
    'target_pengembalian',
]

# Only exists on quarterly reports, never on the participant record
REPORT_ONLY_FIELDS = ('jumlah_ternak_saat_ini',)

DUPLICATE_NIK_MESSAGE = 'NIK sudah terdaftar'
NOT_FOUND_MESSAGE = 'Data peternak tidak ditemukan'


def _is_blank(value):
    return value is None or value == ''


def _without_report_fields(data):
    return {key: value for key, value in data.items() if key not in REPORT_ONLY_FIELDS}


@contextmanager
def _store_errors(action, writes_nik=False):
    """
    Translate database failures into program errors.

    An integrity failure is a NIK conflict only where a NIK is written;
    anywhere else it means the data itself was rejected.
    """
    try:
        yield
    except IntegrityError as e:
        logger.warning(f"Integrity error while {action}: {str(e)}")
        if writes_nik:
            raise ConflictError(DUPLICATE_NIK_MESSAGE, field='nik') from e
        raise ValidationError() from e
    except DatabaseError as e:
        logger.error(f"Error {action}: {str(e)}")
        raise StoreError() from e


class PeternakStore:
    """
    CRUD over participant records.

    Usage:
        record = PeternakStore.create(data)
        PeternakStore.update(record['id'], {'alamat': 'Desa Sukamaju'})
        PeternakStore.set_performance_status(record['id'], 'Baik')
    """

    @classmethod
    def create(cls, data):
        """
        Register a new participant.

        Args:
            data: Mapping with every field in REQUIRED_FIELDS

        Returns:
            dict: The stored record including its generated ``id``

        Raises:
            ValidationError: A required field is missing or malformed
            ConflictError: The NIK is already registered
        """
        data = dict(data.items())
        logger.info(f"Creating peternak with NIK {data.get('nik')}")

        for field in REQUIRED_FIELDS:
            if _is_blank(data.get(field)):
                logger.error(f"Missing required field: {field}")
                raise ValidationError(f"Field {field} wajib diisi", field=field)

        final_data = _without_report_fields(data)
        serializer = PeternakSerializer(data=final_data)
        cls._validate(serializer)

        with _store_errors('creating peternak', writes_nik=True):
            with transaction.atomic():
                if Peternak.objects.filter(nik=serializer.validated_data['nik']).exists():
                    raise ConflictError(DUPLICATE_NIK_MESSAGE, field='nik')
                peternak = serializer.save()

        logger.info(f"Peternak created with ID: {peternak.id}")
        return serializer.data

    @classmethod
    def list_all(cls):
        """Return every participant as a list of records."""
        with _store_errors('listing peternak'):
            queryset = Peternak.objects.all()
            return list(PeternakSerializer(queryset, many=True).data)

    @classmethod
    def get_by_id(cls, peternak_id):
        """Return one participant record or raise NotFoundError."""
        return PeternakSerializer(cls.get_instance(peternak_id)).data

    @classmethod
    def get_instance(cls, peternak_id):
        """Return the Peternak model instance or raise NotFoundError."""
        with _store_errors('getting peternak by id'):
            try:
                return Peternak.objects.get(id=peternak_id)
            except (Peternak.DoesNotExist, DjangoValidationError):
                raise NotFoundError(NOT_FOUND_MESSAGE)

    @classmethod
    def update(cls, peternak_id, patch):
        """
        Merge ``patch`` into a participant record.

        A NIK in the patch must not belong to another participant; in that
        case nothing is written.

        Returns:
            dict: The merged record
        """
        peternak = cls.get_instance(peternak_id)
        patch = _without_report_fields(dict(patch.items()))

        serializer = PeternakSerializer(peternak, data=patch, partial=True)
        cls._validate(serializer)

        with _store_errors('updating peternak', writes_nik=True):
            with transaction.atomic():
                nik = serializer.validated_data.get('nik')
                if nik:
                    duplicate = Peternak.objects.filter(nik=nik).exclude(id=peternak.id).exists()
                    if duplicate:
                        raise ConflictError(DUPLICATE_NIK_MESSAGE, field='nik')
                serializer.save()

        logger.info(f"Peternak {peternak.id} updated: {', '.join(sorted(patch.keys()))}")
        return serializer.data

    @classmethod
    def delete(cls, peternak_id):
        """Remove a participant record."""
        peternak = cls.get_instance(peternak_id)

        with _store_errors('deleting peternak'):
            with transaction.atomic():
                peternak.delete()

        logger.info(f"Peternak {peternak_id} deleted")
        return {'success': True}

    @classmethod
    def set_performance_status(cls, peternak_id, status_kinerja):
        """Narrow update of the performance status field only."""
        peternak = cls.get_instance(peternak_id)

        serializer = StatusKinerjaSerializer(data={'status_kinerja': status_kinerja})
        cls._validate(serializer)
        status_kinerja = serializer.validated_data['status_kinerja']

        with _store_errors('updating status kinerja'):
            Peternak.objects.filter(id=peternak.id).update(
                status_kinerja=status_kinerja,
                updated_at=timezone.now()
            )

        logger.info(f"Peternak {peternak.id} status kinerja set to {status_kinerja}")
        return {'id': str(peternak.id), 'status_kinerja': status_kinerja}

    @staticmethod
    def _validate(serializer):
        """Raise ValidationError naming the first offending field."""
        if serializer.is_valid():
            return

        field, messages = next(iter(serializer.errors.items()))
        message = messages[0] if isinstance(messages, list) else messages
        logger.error(f"Invalid peternak field {field}: {message}")
        raise ValidationError(f"Field {field} tidak valid: {message}", field=field)
