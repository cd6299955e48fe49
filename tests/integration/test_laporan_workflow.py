"""
End-to-end tests of the quarterly report workflow:
next quarter -> prefilled form -> submit -> edit -> summary.
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from laporan.models import LaporanTriwulan, MAX_QUARTER
from laporan.services.report_form import LOGIC_ERROR

pytestmark = pytest.mark.django_db


LAPORAN_URL = '/api/laporan/'


def laporan_url(peternak_id):
    return f'/api/peternak/{peternak_id}/laporan/'


def next_quarter_url(peternak_id):
    return f'{laporan_url(peternak_id)}next-quarter/'


def fill_cycle(peternak_id):
    today = timezone.localdate()
    for quarter in range(1, MAX_QUARTER + 1):
        LaporanTriwulan.objects.create(
            peternak_id=peternak_id,
            quarter=quarter,
            year=today.year,
            start_date=today,
            end_date=today,
            display_period=f'Triwulan {quarter} {today.year}',
            jumlah_ternak_awal=10,
            jumlah_ternak_saat_ini=10,
            tanggal_laporan=today,
        )


class TestNextQuarter:

    def test_first_quarter_with_prefill(self, auth_client, peternak):
        response = auth_client.get(next_quarter_url(peternak['id']))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quarter_number'] == 1
        assert response.data['can_create'] is True
        assert response.data['existing_reports'] == []
        assert response.data['prefill'] == {'jumlah_awal': 10, 'jumlah_saat_ini': 10}

    def test_unknown_participant(self, auth_client):
        response = auth_client.get(next_quarter_url(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_complete_cycle(self, auth_client, peternak):
        fill_cycle(peternak['id'])

        response = auth_client.get(next_quarter_url(peternak['id']))

        assert response.data['quarter_number'] is None
        assert response.data['quarter_info'] is None
        assert response.data['can_create'] is False
        assert response.data['prefill'] is None
        assert len(response.data['existing_reports']) == MAX_QUARTER


class TestSubmitReport:

    def test_submit_first_and_second_quarter(self, auth_client, peternak):
        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '2', 'jumlah_mati': '1', 'jumlah_dijual': '3', 'keterangan': 'Sehat'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quarter'] == 1
        assert response.data['jumlah_ternak_awal'] == 10
        assert response.data['jumlah_ternak_saat_ini'] == 8
        assert response.data['target_pengembalian'] == 12
        assert response.data['catatan'] == 'Sehat'

        prefill = auth_client.get(next_quarter_url(peternak['id'])).data['prefill']
        assert prefill == {'jumlah_awal': 8, 'jumlah_saat_ini': 8}

        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '1', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quarter'] == 2
        assert response.data['jumlah_ternak_awal'] == 8
        assert response.data['jumlah_ternak_saat_ini'] == 9

    def test_prefilled_initial_count_cannot_be_overridden(self, auth_client, peternak):
        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_awal': '100', 'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['jumlah_ternak_awal'] == 10

    def test_deaths_and_sales_exceed_initial_count(self, auth_client, peternak):
        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '8', 'jumlah_dijual': '5'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert LOGIC_ERROR in response.data['errors']
        assert LaporanTriwulan.objects.count() == 0

    def test_invalid_and_missing_counts(self, auth_client, peternak):
        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '1.5', 'jumlah_mati': '0'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.data['errors']) == {'jumlah_lahir', 'jumlah_dijual'}

    def test_future_report_date(self, auth_client, peternak):
        tomorrow = (timezone.localdate() + timedelta(days=1)).isoformat()

        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0', 'tanggal_laporan': tomorrow},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'tanggal_laporan' in response.data['errors']

    def test_complete_cycle_is_rejected(self, auth_client, peternak):
        fill_cycle(peternak['id'])

        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['field'] == 'quarter'
        assert LaporanTriwulan.objects.count() == MAX_QUARTER

    def test_unknown_participant(self, auth_client):
        response = auth_client.post(laporan_url(uuid.uuid4()), {'jumlah_lahir': '0'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestEditAndDeleteReport:

    @pytest.fixture
    def laporan(self, auth_client, peternak):
        response = auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '2', 'jumlah_mati': '1', 'jumlah_dijual': '3'},
            format='json'
        )
        return response.data

    def test_get(self, auth_client, laporan):
        response = auth_client.get(f"{LAPORAN_URL}{laporan['id']}/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quarter'] == 1

    def test_edit_recomputes_current_count(self, auth_client, laporan):
        response = auth_client.put(
            f"{LAPORAN_URL}{laporan['id']}/",
            {'jumlah_lahir': '4', 'kendala': '<i>Pakan</i> mahal'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quarter'] == 1
        assert response.data['jumlah_lahir'] == 4
        assert response.data['jumlah_ternak_saat_ini'] == 10
        assert response.data['kendala'] == 'Pakan mahal'

    def test_edit_with_broken_balance(self, auth_client, laporan):
        response = auth_client.put(
            f"{LAPORAN_URL}{laporan['id']}/",
            {'jumlah_mati': '20'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert LOGIC_ERROR in response.data['errors']

    def test_only_latest_report_can_be_deleted(self, auth_client, peternak, laporan):
        auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        response = auth_client.delete(f"{LAPORAN_URL}{laporan['id']}/")

        assert response.status_code == status.HTTP_409_CONFLICT


class TestReportListing:

    def test_list_for_participant(self, auth_client, peternak):
        auth_client.post(
            laporan_url(peternak['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        response = auth_client.get(laporan_url(peternak['id']))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_filter_and_summary(self, auth_client, peternak, peternak_data):
        peternak_data['nik'] = '3201010101010002'
        other = auth_client.post('/api/peternak/', peternak_data, format='json').data

        for counts in ({'jumlah_lahir': '2', 'jumlah_mati': '1', 'jumlah_dijual': '3'},
                       {'jumlah_lahir': '3', 'jumlah_mati': '0', 'jumlah_dijual': '1'}):
            auth_client.post(laporan_url(peternak['id']), counts, format='json')
        auth_client.post(
            laporan_url(other['id']),
            {'jumlah_lahir': '0', 'jumlah_mati': '0', 'jumlah_dijual': '0'},
            format='json'
        )

        response = auth_client.get(LAPORAN_URL, {'peternak': peternak['id']})
        assert response.data['count'] == 2

        response = auth_client.get(LAPORAN_URL, {'quarter': 2})
        assert response.data['count'] == 1

        response = auth_client.get(f'{LAPORAN_URL}summary/')
        summary = {row['peternak_id']: row for row in response.data['results']}
        assert summary[peternak['id']] == {
            'peternak_id': peternak['id'],
            'jumlah_laporan': 2,
            'triwulan_terakhir': 2,
            'jumlah_ternak_saat_ini': 10,
            'total_lahir': 5,
            'total_kematian': 1,
            'total_terjual': 4,
        }
        assert summary[other['id']]['jumlah_laporan'] == 1
