"""
Tests for the report store.
"""
import uuid
from datetime import date

import pytest
from django.db import IntegrityError

from core.exceptions import ConflictError, NotFoundError, ValidationError
from laporan.models import LaporanTriwulan
from laporan.services import LaporanStore
from laporan.services.laporan_store import PROGRAM_COMPLETE_MESSAGE, _store_errors
from laporan.services.report_form import LOGIC_ERROR

pytestmark = pytest.mark.django_db


class TestCreateLaporan:

    def test_first_report(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        assert record['peternak_id'] == peternak['id']
        assert record['quarter'] == 1
        assert record['display_period'] == 'Triwulan 1 2025'
        assert record['jumlah_ternak_awal'] == 10
        assert record['jumlah_ternak_saat_ini'] == 8
        assert record['start_date'] == '2025-01-15'

    def test_next_report_continues_from_previous(self, peternak, make_laporan_payload, today):
        LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        record = LaporanStore.create(make_laporan_payload(peternak, today, lahir=0, mati=0, dijual=0), today=today)

        assert record['quarter'] == 2
        assert record['jumlah_ternak_awal'] == 8

    def test_unknown_participant(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today)
        payload['peternak_id'] = str(uuid.uuid4())

        with pytest.raises(NotFoundError):
            LaporanStore.create(payload, today=today)

    def test_quarter_must_be_next_allowed(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today)
        payload['quarter'] = 3

        with pytest.raises(ConflictError):
            LaporanStore.create(payload, today=today)

        assert LaporanTriwulan.objects.count() == 0

    def test_duplicate_quarter(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today)
        LaporanStore.create(payload, today=today)

        with pytest.raises(ConflictError) as exc_info:
            LaporanStore.create(payload, today=today)

        assert exc_info.value.field == 'quarter'
        assert LaporanTriwulan.objects.count() == 1

    def test_deaths_and_sales_exceed_initial_count(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today, mati=6, dijual=5, jumlah_saat_ini=0)

        with pytest.raises(ValidationError) as exc_info:
            LaporanStore.create(payload, today=today)

        assert exc_info.value.field == LOGIC_ERROR

    def test_current_count_must_match_balance(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today, jumlah_saat_ini=20)

        with pytest.raises(ValidationError) as exc_info:
            LaporanStore.create(payload, today=today)

        assert exc_info.value.field == 'jumlah_ternak_saat_ini'

    def test_report_date_in_future(self, peternak, make_laporan_payload, today):
        payload = make_laporan_payload(peternak, today, tanggal_laporan='2025-04-02')

        with pytest.raises(ValidationError) as exc_info:
            LaporanStore.create(payload, today=today)

        assert exc_info.value.field == 'tanggal_laporan'

    def test_cycle_ends_after_eight_quarters(self, peternak, make_laporan_payload, today):
        for _ in range(8):
            LaporanStore.create(make_laporan_payload(peternak, today, lahir=0, mati=0, dijual=0), today=today)

        with pytest.raises(ConflictError) as exc_info:
            LaporanStore.create(make_laporan_payload(peternak, today, lahir=0, mati=0, dijual=0), today=today)

        assert str(exc_info.value) == PROGRAM_COMPLETE_MESSAGE
        assert exc_info.value.field == 'quarter'
        quarters = list(LaporanTriwulan.objects.filter(peternak_id=peternak['id']).values_list('quarter', flat=True))
        assert quarters == [1, 2, 3, 4, 5, 6, 7, 8]


class TestUpdateLaporan:

    def test_update_counts(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        updated = LaporanStore.update(
            record['id'],
            {'jumlah_lahir': 4, 'jumlah_ternak_saat_ini': 10, 'kendala': 'Pakan mahal'},
            today=today
        )

        assert updated['jumlah_lahir'] == 4
        assert updated['jumlah_ternak_saat_ini'] == 10
        assert updated['kendala'] == 'Pakan mahal'

    def test_update_keeps_quarter_and_participant(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        updated = LaporanStore.update(
            record['id'],
            {'quarter': 5, 'peternak_id': str(uuid.uuid4()), 'catatan': 'Revisi'},
            today=today
        )

        assert updated['quarter'] == 1
        assert updated['peternak_id'] == peternak['id']
        assert updated['catatan'] == 'Revisi'

    def test_update_rechecks_balance(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        with pytest.raises(ValidationError):
            LaporanStore.update(record['id'], {'jumlah_lahir': 9}, today=today)

        assert LaporanTriwulan.objects.get(id=record['id']).jumlah_lahir == 2

    def test_update_unknown_report(self, today):
        with pytest.raises(NotFoundError):
            LaporanStore.update(uuid.uuid4(), {'catatan': 'x'}, today=today)


class TestReadAndDeleteLaporan:

    def test_list_for_peternak_is_ordered_by_quarter(self, peternak, make_laporan_payload, today):
        for _ in range(3):
            LaporanStore.create(make_laporan_payload(peternak, today, lahir=0, mati=0, dijual=0), today=today)

        records = LaporanStore.list_for_peternak(peternak['id'])

        assert [record['quarter'] for record in records] == [1, 2, 3]

    def test_list_for_unknown_peternak(self):
        with pytest.raises(NotFoundError):
            LaporanStore.list_for_peternak(uuid.uuid4())

    def test_get_unknown_report(self):
        with pytest.raises(NotFoundError):
            LaporanStore.get_by_id(uuid.uuid4())

    def test_only_latest_report_can_be_deleted(self, peternak, make_laporan_payload, today):
        first = LaporanStore.create(make_laporan_payload(peternak, today), today=today)
        second = LaporanStore.create(make_laporan_payload(peternak, today, lahir=0, mati=0, dijual=0), today=today)

        with pytest.raises(ConflictError):
            LaporanStore.delete(first['id'])

        assert LaporanStore.delete(second['id']) == {'success': True}
        assert LaporanStore.delete(first['id']) == {'success': True}
        assert LaporanTriwulan.objects.count() == 0

    def test_balance_valid_property(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(make_laporan_payload(peternak, today), today=today)

        assert LaporanTriwulan.objects.get(id=record['id']).balance_valid

    def test_report_date_is_kept(self, peternak, make_laporan_payload, today):
        record = LaporanStore.create(
            make_laporan_payload(peternak, today, tanggal_laporan='2025-03-28'),
            today=today
        )

        assert LaporanTriwulan.objects.get(id=record['id']).tanggal_laporan == date(2025, 3, 28)


class TestStoreErrorTranslation:

    def test_quarter_collision_on_create_is_a_conflict(self):
        with pytest.raises(ConflictError) as exc_info:
            with _store_errors('creating laporan', writes_quarter=True):
                raise IntegrityError('UNIQUE constraint failed: laporan_triwulan.peternak_id, laporan_triwulan.quarter')

        assert exc_info.value.field == 'quarter'

    def test_other_integrity_errors_are_validation_errors(self):
        with pytest.raises(ValidationError):
            with _store_errors('updating laporan'):
                raise IntegrityError('CHECK constraint failed: laporan_quarter_range')
