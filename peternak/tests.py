"""
Tests for the participant store.
"""
import uuid

import pytest
from django.db import IntegrityError

from core.exceptions import ConflictError, NotFoundError, ValidationError
from laporan.models import LaporanTriwulan
from peternak.models import Peternak
from peternak.services import PeternakStore
from peternak.services.peternak_store import DUPLICATE_NIK_MESSAGE, REQUIRED_FIELDS, _store_errors

pytestmark = pytest.mark.django_db


class TestCreatePeternak:

    def test_create_returns_record_with_id(self, peternak_data):
        record = PeternakStore.create(peternak_data)

        assert record['id']
        for field, value in peternak_data.items():
            assert record[field] == value, field
        assert record['status_kinerja'] == ''
        assert Peternak.objects.filter(id=record['id']).exists()

    @pytest.mark.parametrize('field', REQUIRED_FIELDS)
    def test_missing_required_field(self, peternak_data, field):
        peternak_data[field] = ''

        with pytest.raises(ValidationError) as exc_info:
            PeternakStore.create(peternak_data)

        assert exc_info.value.field == field
        assert Peternak.objects.count() == 0

    def test_zero_counts_are_not_missing(self, peternak_data):
        peternak_data['jumlah_ternak_awal'] = 0
        peternak_data['target_pengembalian'] = 0

        record = PeternakStore.create(peternak_data)

        assert record['jumlah_ternak_awal'] == 0

    def test_current_count_is_not_stored_on_participant(self, peternak_data):
        peternak_data['jumlah_ternak_saat_ini'] = 99

        record = PeternakStore.create(peternak_data)

        assert 'jumlah_ternak_saat_ini' not in record

    def test_name_is_sanitized(self, peternak_data):
        peternak_data['nama_lengkap'] = '  <b>Siti Aminah</b> '

        record = PeternakStore.create(peternak_data)

        assert record['nama_lengkap'] == 'Siti Aminah'

    def test_invalid_phone_number(self, peternak_data):
        peternak_data['nomor_telepon'] = 'bukan nomor'

        with pytest.raises(ValidationError) as exc_info:
            PeternakStore.create(peternak_data)

        assert exc_info.value.field == 'nomor_telepon'

    def test_duplicate_nik_is_rejected(self, peternak_data):
        PeternakStore.create(peternak_data)
        peternak_data['nama_lengkap'] = 'Orang Lain'

        with pytest.raises(ConflictError) as exc_info:
            PeternakStore.create(peternak_data)

        assert str(exc_info.value) == DUPLICATE_NIK_MESSAGE
        assert exc_info.value.field == 'nik'
        assert Peternak.objects.count() == 1


class TestReadPeternak:

    def test_get_by_id(self, peternak):
        record = PeternakStore.get_by_id(peternak['id'])

        assert record['nik'] == peternak['nik']

    def test_get_unknown_id(self):
        with pytest.raises(NotFoundError):
            PeternakStore.get_by_id(uuid.uuid4())

    def test_get_malformed_id(self):
        with pytest.raises(NotFoundError):
            PeternakStore.get_by_id('bukan-uuid')

    def test_list_all(self, peternak, peternak_data):
        peternak_data['nik'] = '3201010101010002'
        peternak_data['nama_lengkap'] = 'Ani Lestari'
        PeternakStore.create(peternak_data)

        records = PeternakStore.list_all()

        assert [record['nama_lengkap'] for record in records] == ['Ani Lestari', 'Budi Santoso']


class TestUpdatePeternak:

    def test_partial_update_merges_fields(self, peternak):
        record = PeternakStore.update(peternak['id'], {'alamat': 'Desa Mekarsari'})

        assert record['alamat'] == 'Desa Mekarsari'
        assert record['nama_lengkap'] == peternak['nama_lengkap']

    def test_update_keeps_own_nik(self, peternak):
        record = PeternakStore.update(peternak['id'], {'nik': peternak['nik'], 'alamat': 'Desa Baru'})

        assert record['nik'] == peternak['nik']

    def test_update_to_taken_nik_is_rejected(self, peternak, peternak_data):
        peternak_data['nik'] = '3201010101010002'
        other = PeternakStore.create(peternak_data)

        with pytest.raises(ConflictError):
            PeternakStore.update(other['id'], {'nik': peternak['nik'], 'alamat': 'Desa Lain'})

        stored = Peternak.objects.get(id=other['id'])
        assert stored.nik == '3201010101010002'
        assert stored.alamat == peternak_data['alamat']

    def test_update_unknown_id(self):
        with pytest.raises(NotFoundError):
            PeternakStore.update(uuid.uuid4(), {'alamat': 'Desa Baru'})

    def test_set_performance_status(self, peternak):
        result = PeternakStore.set_performance_status(peternak['id'], 'Baik')

        assert result == {'id': peternak['id'], 'status_kinerja': 'Baik'}
        assert Peternak.objects.get(id=peternak['id']).status_kinerja == 'Baik'

    @pytest.mark.parametrize('status_kinerja', [None, 'x' * 51])
    def test_invalid_performance_status(self, peternak, status_kinerja):
        with pytest.raises(ValidationError) as exc_info:
            PeternakStore.set_performance_status(peternak['id'], status_kinerja)

        assert exc_info.value.field == 'status_kinerja'
        assert Peternak.objects.get(id=peternak['id']).status_kinerja == ''


class TestDeletePeternak:

    def test_delete(self, peternak):
        assert PeternakStore.delete(peternak['id']) == {'success': True}
        assert not Peternak.objects.filter(id=peternak['id']).exists()

    def test_delete_removes_reports(self, peternak, make_laporan_payload, today):
        from laporan.services import LaporanStore
        LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        PeternakStore.delete(peternak['id'])

        assert LaporanTriwulan.objects.count() == 0

    def test_delete_unknown_id(self):
        with pytest.raises(NotFoundError):
            PeternakStore.delete(uuid.uuid4())


class TestStoreErrorTranslation:

    def test_integrity_error_writing_nik_is_a_conflict(self):
        with pytest.raises(ConflictError) as exc_info:
            with _store_errors('creating peternak', writes_nik=True):
                raise IntegrityError('UNIQUE constraint failed: peternak.nik')

        assert exc_info.value.field == 'nik'

    def test_other_integrity_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            with _store_errors('updating status kinerja'):
                raise IntegrityError('NOT NULL constraint failed: peternak.status_kinerja')
