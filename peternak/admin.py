"""
Peternak Django Admin Configuration
"""
from django.contrib import admin

from .models import Peternak


@admin.register(Peternak)
class PeternakAdmin(admin.ModelAdmin):
    """Admin interface for program participants."""

    list_display = [
        'nama_lengkap', 'nik', 'jenis_kelamin', 'nomor_telepon',
        'status_siklus', 'status_kinerja', 'tanggal_daftar', 'report_count'
    ]

    list_filter = ['jenis_kelamin', 'status_siklus', 'status_kinerja', 'tanggal_daftar']

    search_fields = ['nama_lengkap', 'nik', 'alamat']

    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Identitas', {
            'fields': ('nama_lengkap', 'nik', 'jenis_kelamin')
        }),
        ('Kontak', {
            'fields': ('alamat', 'nomor_telepon')
        }),
        ('Program', {
            'fields': (
                'status_siklus', 'tanggal_daftar', 'jumlah_ternak_awal',
                'target_pengembalian', 'status_kinerja'
            )
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def report_count(self, obj):
        return obj.laporan.count()
    report_count.short_description = 'Laporan'
