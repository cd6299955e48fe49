"""
Shared pytest fixtures for participant and report tests.
"""
from datetime import date

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def petugas(db):
    """Field officer account."""
    return get_user_model().objects.create_user(
        username='petugas',
        email='petugas@example.com',
        password='rahasia-123'
    )


@pytest.fixture
def auth_client(api_client, petugas):
    """API client authenticated as the field officer."""
    api_client.force_authenticate(user=petugas)
    return api_client


@pytest.fixture
def peternak_data():
    """Complete registration payload of a participant."""
    return {
        'nama_lengkap': 'Budi Santoso',
        'nik': '3201010101010001',
        'jenis_kelamin': 'Laki-laki',
        'alamat': 'Desa Sukamaju RT 02 RW 03',
        'nomor_telepon': '+6281234567890',
        'status_siklus': 'Siklus 1',
        'tanggal_daftar': '2025-01-15',
        'jumlah_ternak_awal': 10,
        'target_pengembalian': 12,
    }


@pytest.fixture
def peternak(db, peternak_data):
    """Registered participant record."""
    from peternak.services import PeternakStore
    return PeternakStore.create(peternak_data)


@pytest.fixture
def make_laporan_payload():
    """
    Build the payload of the participant's next report.

    Counts follow the balance rule unless ``jumlah_saat_ini`` is given.
    """
    from laporan.services.eligibility import get_next_allowed_quarter
    from laporan.services.report_form import build_payload, calculate_current_count

    def _make(peternak, today, awal=None, lahir=2, mati=1, dijual=3, jumlah_saat_ini=None,
              tanggal_laporan=None):
        next_quarter = get_next_allowed_quarter(peternak['id'], today=today)
        if awal is None:
            existing = next_quarter['existing_reports']
            awal = existing[-1].jumlah_ternak_saat_ini if existing else peternak['jumlah_ternak_awal']
        if jumlah_saat_ini is None:
            jumlah_saat_ini = calculate_current_count(awal, lahir, mati, dijual)

        form_data = {
            'jumlah_awal': str(awal),
            'jumlah_lahir': str(lahir),
            'jumlah_mati': str(mati),
            'jumlah_dijual': str(dijual),
            'jumlah_saat_ini': str(jumlah_saat_ini),
            'kendala': '',
            'solusi': '',
            'keterangan': '',
            'tanggal_laporan': tanggal_laporan or today.isoformat(),
        }
        return build_payload(form_data, peternak['id'], next_quarter=next_quarter,
                             peternak=peternak, today=today)

    return _make


@pytest.fixture
def today():
    """Fixed reference date for store and form tests."""
    return date(2025, 4, 1)
