"""
Laporan Triwulan Django Admin Configuration
"""
from django.contrib import admin

from .models import LaporanTriwulan


@admin.register(LaporanTriwulan)
class LaporanTriwulanAdmin(admin.ModelAdmin):
    """Admin interface for quarterly reports."""

    list_display = [
        'peternak', 'quarter', 'display_period', 'jumlah_ternak_awal',
        'jumlah_lahir', 'jumlah_kematian', 'jumlah_terjual',
        'jumlah_ternak_saat_ini', 'tanggal_laporan'
    ]

    list_filter = ['quarter', 'year', 'tanggal_laporan']

    search_fields = ['peternak__nama_lengkap', 'peternak__nik', 'kendala', 'catatan']

    list_select_related = ['peternak']

    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Periode', {
            'fields': ('peternak', 'quarter', 'year', 'start_date', 'end_date', 'display_period')
        }),
        ('Jumlah Ternak', {
            'fields': (
                'jumlah_ternak_awal', 'jumlah_lahir', 'jumlah_kematian',
                'jumlah_terjual', 'jumlah_ternak_saat_ini', 'target_pengembalian'
            )
        }),
        ('Catatan', {
            'fields': ('kendala', 'solusi', 'catatan', 'tanggal_laporan')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
