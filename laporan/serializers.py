"""
Laporan Triwulan Serializers
"""
from django.utils.html import strip_tags
from rest_framework import serializers

from .models import LaporanTriwulan


class LaporanTriwulanSerializer(serializers.ModelSerializer):
    """
    Serializer for stored quarterly reports.

    The owning participant is set by LaporanStore, never by the client.
    """

    peternak_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = LaporanTriwulan
        fields = [
            'id', 'peternak_id', 'quarter', 'year', 'start_date', 'end_date',
            'display_period', 'jumlah_ternak_awal', 'jumlah_ternak_saat_ini',
            'target_pengembalian', 'jumlah_kematian', 'jumlah_lahir',
            'jumlah_terjual', 'catatan', 'kendala', 'solusi', 'tanggal_laporan',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'peternak_id', 'created_at', 'updated_at']


class LaporanFormSerializer(serializers.Serializer):
    """
    Raw input of the quarterly report form.

    Only sanitizes; the form rules live in laporan.services.report_form so
    every field stays a string here, exactly as the operator typed it.
    """

    jumlah_awal = serializers.CharField(required=False, allow_blank=True, max_length=20)
    jumlah_lahir = serializers.CharField(required=False, allow_blank=True, max_length=20)
    jumlah_mati = serializers.CharField(required=False, allow_blank=True, max_length=20)
    jumlah_dijual = serializers.CharField(required=False, allow_blank=True, max_length=20)
    tanggal_laporan = serializers.CharField(required=False, allow_blank=True, max_length=20)

    kendala = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    solusi = serializers.CharField(required=False, allow_blank=True, max_length=2000)
    keterangan = serializers.CharField(required=False, allow_blank=True, max_length=2000)

    def validate_kendala(self, value):
        return strip_tags(value).strip()

    def validate_solusi(self, value):
        return strip_tags(value).strip()

    def validate_keterangan(self, value):
        return strip_tags(value).strip()


class NextQuarterSerializer(serializers.Serializer):
    """Eligibility result plus the prefill of a new report."""

    quarter_number = serializers.IntegerField(allow_null=True)
    quarter_info = serializers.DictField(allow_null=True)
    can_create = serializers.BooleanField()
    existing_reports = LaporanTriwulanSerializer(many=True)
    prefill = serializers.DictField(allow_null=True)


class LaporanSummarySerializer(serializers.Serializer):
    """Aggregated figures of one participant's reports."""

    peternak_id = serializers.CharField()
    jumlah_laporan = serializers.IntegerField()
    triwulan_terakhir = serializers.IntegerField()
    jumlah_ternak_saat_ini = serializers.IntegerField()
    total_lahir = serializers.IntegerField()
    total_kematian = serializers.IntegerField()
    total_terjual = serializers.IntegerField()
