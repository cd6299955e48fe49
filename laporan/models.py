"""
Laporan Triwulan Models

Quarterly progress reports documenting livestock headcount changes of a
participant during one quarter (triwulan) of the program cycle.
"""

import uuid
from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator, MaxValueValidator

from peternak.models import Peternak


MAX_QUARTER = 8


class LaporanTriwulan(models.Model):
    """
    One quarterly report of a participant.

    Balance invariant:
        jumlah_ternak_saat_ini = max(0, awal + lahir - kematian - terjual)
        kematian + terjual <= awal

    Quarters of one participant are contiguous from 1 up to 8.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    peternak = models.ForeignKey(
        Peternak,
        on_delete=models.CASCADE,
        related_name='laporan'
    )

    # Period
    quarter = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_QUARTER)],
        help_text="Quarter number within the program cycle (1-8)"
    )
    year = models.PositiveIntegerField()
    start_date = models.DateField()
    end_date = models.DateField()
    display_period = models.CharField(
        max_length=50,
        help_text="Display label, e.g. Triwulan 1 2025"
    )

    # Livestock counts
    jumlah_ternak_awal = models.PositiveIntegerField(default=0)
    jumlah_ternak_saat_ini = models.PositiveIntegerField(default=0)
    target_pengembalian = models.PositiveIntegerField(default=0)
    jumlah_kematian = models.PositiveIntegerField(default=0)
    jumlah_lahir = models.PositiveIntegerField(default=0)
    jumlah_terjual = models.PositiveIntegerField(default=0)

    # Notes
    catatan = models.TextField(blank=True, default='')
    kendala = models.TextField(blank=True, default='')
    solusi = models.TextField(blank=True, default='')

    tanggal_laporan = models.DateField(
        db_index=True,
        help_text="Date of the meeting the report was recorded at"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'laporan_triwulan'
        ordering = ['peternak', 'quarter']
        verbose_name = 'Laporan Triwulan'
        verbose_name_plural = 'Laporan Triwulan'
        constraints = [
            models.UniqueConstraint(
                fields=['peternak', 'quarter'],
                name='unique_laporan_quarter_per_peternak'
            ),
            models.CheckConstraint(
                condition=Q(quarter__gte=1) & Q(quarter__lte=MAX_QUARTER),
                name='laporan_quarter_range'
            ),
        ]
        indexes = [
            models.Index(fields=['year', 'quarter'], name='laporan_year_quarter_idx'),
        ]

    def __str__(self):
        return f"{self.peternak.nama_lengkap} - {self.display_period}"

    @property
    def balance_valid(self):
        """True if deaths and sales do not exceed the initial count."""
        return self.jumlah_kematian + self.jumlah_terjual <= self.jumlah_ternak_awal
