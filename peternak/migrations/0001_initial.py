# Generated manually for the Peternak model
from django.db import migrations, models
import django.core.validators
import phonenumber_field.modelfields
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Peternak',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('nama_lengkap', models.CharField(max_length=200)),
                ('nik', models.CharField(max_length=32, unique=True, help_text='Nomor Induk Kependudukan (national ID), unique per participant')),
                ('jenis_kelamin', models.CharField(max_length=20, choices=[('Laki-laki', 'Laki-laki'), ('Perempuan', 'Perempuan')])),
                ('alamat', models.TextField()),
                ('nomor_telepon', phonenumber_field.modelfields.PhoneNumberField(max_length=128, region='ID')),
                ('status_siklus', models.CharField(max_length=50, help_text='Program cycle status, e.g. Siklus 1')),
                ('tanggal_daftar', models.DateField(help_text='Enrollment date')),
                ('jumlah_ternak_awal', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)], help_text='Number of livestock loaned at enrollment')),
                ('target_pengembalian', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(0)], help_text='Number of livestock to be returned at the end of the cycle')),
                ('status_kinerja', models.CharField(max_length=50, blank=True, default='', help_text='Performance status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'peternak',
                'ordering': ['nama_lengkap'],
                'verbose_name': 'Peternak',
                'verbose_name_plural': 'Peternak',
            },
        ),
        migrations.AddIndex(
            model_name='peternak',
            index=models.Index(fields=['status_siklus'], name='peternak_status_siklus_idx'),
        ),
    ]
