"""
API tests for participant registration and maintenance.
"""

import uuid

import pytest
from rest_framework import status

pytestmark = pytest.mark.django_db


PETERNAK_URL = '/api/peternak/'


def detail_url(peternak_id):
    return f'{PETERNAK_URL}{peternak_id}/'


class TestPeternakAuth:

    def test_requires_authentication(self, api_client):
        response = api_client.get(PETERNAK_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_login(self, api_client, petugas):
        response = api_client.post(
            '/api/auth/token/',
            {'username': 'petugas', 'password': 'rahasia-123'},
            format='json'
        )
        assert response.status_code == status.HTTP_200_OK

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        assert api_client.get(PETERNAK_URL).status_code == status.HTTP_200_OK


class TestPeternakEndpoints:

    def test_register_and_list(self, auth_client, peternak_data):
        response = auth_client.post(PETERNAK_URL, peternak_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['nik'] == peternak_data['nik']

        response = auth_client.get(PETERNAK_URL)
        assert response.data['count'] == 1
        assert response.data['results'][0]['nama_lengkap'] == 'Budi Santoso'

    def test_register_missing_field(self, auth_client, peternak_data):
        del peternak_data['alamat']

        response = auth_client.post(PETERNAK_URL, peternak_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'
        assert response.data['field'] == 'alamat'

    def test_register_duplicate_nik(self, auth_client, peternak, peternak_data):
        response = auth_client.post(PETERNAK_URL, peternak_data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {'error': 'NIK sudah terdaftar', 'code': 'conflict', 'field': 'nik'}

    def test_get_unknown(self, auth_client):
        response = auth_client.get(detail_url(uuid.uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_patch(self, auth_client, peternak):
        response = auth_client.patch(detail_url(peternak['id']), {'status_siklus': 'Siklus 2'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status_siklus'] == 'Siklus 2'
        assert response.data['nik'] == peternak['nik']

    def test_status_kinerja(self, auth_client, peternak):
        response = auth_client.patch(
            f"{detail_url(peternak['id'])}status-kinerja/",
            {'status_kinerja': 'Baik'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'id': peternak['id'], 'status_kinerja': 'Baik'}

    def test_status_kinerja_requires_value(self, auth_client, peternak):
        response = auth_client.patch(f"{detail_url(peternak['id'])}status-kinerja/", {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'status_kinerja' in response.data['fields']

    def test_delete(self, auth_client, peternak):
        response = auth_client.delete(detail_url(peternak['id']))

        assert response.status_code == status.HTTP_200_OK
        assert auth_client.get(detail_url(peternak['id'])).status_code == status.HTTP_404_NOT_FOUND
