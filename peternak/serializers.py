"""
Peternak Serializers
"""
from django.utils.html import strip_tags
from rest_framework import serializers
from phonenumber_field.serializerfields import PhoneNumberField

from .models import Peternak


class PeternakSerializer(serializers.ModelSerializer):
    """
    Serializer for participant records.

    NIK uniqueness is checked by PeternakStore (and the unique index),
    so the automatic UniqueValidator is switched off here.
    """

    nomor_telepon = PhoneNumberField(region='ID')

    class Meta:
        model = Peternak
        fields = [
            'id', 'nama_lengkap', 'nik', 'alamat', 'nomor_telepon',
            'jenis_kelamin', 'status_siklus', 'tanggal_daftar',
            'jumlah_ternak_awal', 'target_pengembalian', 'status_kinerja',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'nik': {'validators': []},
        }

    def validate_nama_lengkap(self, value):
        """Sanitize name field."""
        return strip_tags(value).strip()

    def validate_nik(self, value):
        return value.strip()


class StatusKinerjaSerializer(serializers.Serializer):
    """Payload of the narrow performance status update."""

    status_kinerja = serializers.CharField(max_length=50)
