"""
Peternak Models

A participant of the livestock microfinance program.
"""
import uuid
from django.db import models
from django.core.validators import MinValueValidator
from phonenumber_field.modelfields import PhoneNumberField


class JenisKelamin(models.TextChoices):
    """Gender of the participant."""
    LAKI_LAKI = 'Laki-laki', 'Laki-laki'
    PEREMPUAN = 'Perempuan', 'Perempuan'


class Peternak(models.Model):
    """
    Program participant (farmer) who receives loaned livestock.

    The current livestock count is not stored here; it only exists on the
    quarterly reports (see laporan.LaporanTriwulan).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Identity
    nama_lengkap = models.CharField(max_length=200)
    nik = models.CharField(
        max_length=32,
        unique=True,
        help_text="Nomor Induk Kependudukan (national ID), unique per participant"
    )
    jenis_kelamin = models.CharField(max_length=20, choices=JenisKelamin.choices)

    # Contact
    alamat = models.TextField()
    nomor_telepon = PhoneNumberField(region='ID')

    # Program cycle
    status_siklus = models.CharField(
        max_length=50,
        help_text="Program cycle status, e.g. Siklus 1"
    )
    tanggal_daftar = models.DateField(help_text="Enrollment date")
    jumlah_ternak_awal = models.PositiveIntegerField(
        validators=[MinValueValidator(0)],
        help_text="Number of livestock loaned at enrollment"
    )
    target_pengembalian = models.PositiveIntegerField(
        validators=[MinValueValidator(0)],
        help_text="Number of livestock to be returned at the end of the cycle"
    )
    status_kinerja = models.CharField(
        max_length=50,
        blank=True,
        default='',
        help_text="Performance status"
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'peternak'
        ordering = ['nama_lengkap']
        verbose_name = 'Peternak'
        verbose_name_plural = 'Peternak'
        indexes = [
            models.Index(fields=['status_siklus'], name='peternak_status_siklus_idx'),
        ]

    def __str__(self):
        return f"{self.nama_lengkap} ({self.nik})"
