# Generated manually for the LaporanTriwulan model
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('peternak', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LaporanTriwulan',
            fields=[
                ('id', models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, serialize=False)),
                ('quarter', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(8)], help_text='Quarter number within the program cycle (1-8)')),
                ('year', models.PositiveIntegerField()),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('display_period', models.CharField(max_length=50, help_text='Display label, e.g. Triwulan 1 2025')),
                ('jumlah_ternak_awal', models.PositiveIntegerField(default=0)),
                ('jumlah_ternak_saat_ini', models.PositiveIntegerField(default=0)),
                ('target_pengembalian', models.PositiveIntegerField(default=0)),
                ('jumlah_kematian', models.PositiveIntegerField(default=0)),
                ('jumlah_lahir', models.PositiveIntegerField(default=0)),
                ('jumlah_terjual', models.PositiveIntegerField(default=0)),
                ('catatan', models.TextField(blank=True, default='')),
                ('kendala', models.TextField(blank=True, default='')),
                ('solusi', models.TextField(blank=True, default='')),
                ('tanggal_laporan', models.DateField(db_index=True, help_text='Date of the meeting the report was recorded at')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('peternak', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='laporan', to='peternak.peternak')),
            ],
            options={
                'db_table': 'laporan_triwulan',
                'ordering': ['peternak', 'quarter'],
                'verbose_name': 'Laporan Triwulan',
                'verbose_name_plural': 'Laporan Triwulan',
            },
        ),
        migrations.AddIndex(
            model_name='laporantriwulan',
            index=models.Index(fields=['year', 'quarter'], name='laporan_year_quarter_idx'),
        ),
        migrations.AddConstraint(
            model_name='laporantriwulan',
            constraint=models.UniqueConstraint(fields=('peternak', 'quarter'), name='unique_laporan_quarter_per_peternak'),
        ),
        migrations.AddConstraint(
            model_name='laporantriwulan',
            constraint=models.CheckConstraint(condition=models.Q(('quarter__gte', 1), ('quarter__lte', 8)), name='laporan_quarter_range'),
        ),
    ]
