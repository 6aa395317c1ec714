import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Surah',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.PositiveSmallIntegerField(unique=True)),
                ('name', models.CharField(max_length=64)),
                ('name_arabic', models.CharField(blank=True, max_length=64)),
                ('total_ayat', models.PositiveSmallIntegerField()),
                ('juz', models.PositiveSmallIntegerField(help_text='Juz tempat surah berada (1-30)')),
            ],
            options={
                'ordering': ['number'],
            },
        ),
        migrations.CreateModel(
            name='HafalanRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('start_ayat', models.PositiveSmallIntegerField()),
                ('end_ayat', models.PositiveSmallIntegerField()),
                ('status', models.CharField(choices=[('BELUM_DIHAFAL', 'Belum dihafal'), ('SEDANG_DIHAFAL', 'Sedang dihafal'), ('LANCAR', 'Lancar'), ('MUTQIN', 'Mutqin')], max_length=20)),
                ('quality', models.CharField(choices=[('A', 'A'), ('B', 'B'), ('C', 'C'), ('D', 'D')], default='B', max_length=1)),
                ('fluency', models.CharField(blank=True, max_length=20)),
                ('tajweed', models.CharField(blank=True, max_length=20)),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Menit', null=True)),
                ('method', models.CharField(choices=[('INDIVIDUAL', 'Individu'), ('GROUP', 'Kelompok')], default='INDIVIDUAL', max_length=12)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(limit_choices_to={'role': 'student'}, on_delete=django.db.models.deletion.CASCADE, related_name='hafalan_records', to='accounts.profile')),
                ('surah', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='records', to='hafalan.surah')),
                ('teacher', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_hafalan', to='accounts.profile')),
            ],
            options={
                'ordering': ['-date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='HafalanProgress',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('total_surah', models.PositiveIntegerField(default=0)),
                ('total_ayat', models.PositiveIntegerField(default=0)),
                ('total_juz', models.PositiveSmallIntegerField(default=0)),
                ('juz30_progress', models.FloatField(default=0)),
                ('overall_progress', models.FloatField(default=0)),
                ('avg_quality', models.FloatField(default=0)),
                ('total_sessions', models.PositiveIntegerField(default=0)),
                ('last_setoran_date', models.DateTimeField(blank=True, null=True)),
                ('last_updated', models.DateTimeField(auto_now=True)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('student', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='hafalan_progress', to='accounts.profile')),
            ],
            options={
                'verbose_name_plural': 'hafalan progress',
            },
        ),
        migrations.CreateModel(
            name='HafalanAchievement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_deleted', models.BooleanField(db_index=True, default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('type', models.CharField(choices=[('SURAH_COMPLETE', 'Surah selesai')], default='SURAH_COMPLETE', max_length=20)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('level', models.CharField(choices=[('BRONZE', 'Perunggu'), ('SILVER', 'Perak'), ('GOLD', 'Emas')], default='BRONZE', max_length=10)),
                ('points', models.PositiveIntegerField(default=0)),
                ('earned_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hafalan_achievements', to='accounts.profile')),
                ('surah', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hafalan.surah')),
                ('verified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='accounts.profile')),
            ],
            options={
                'ordering': ['-earned_at'],
            },
        ),
    ]
