from django.db import models
from django.utils import timezone

from apps.accounts.models import Profile
from apps.core.softdelete import SoftDeleteModel


class Surah(models.Model):
    """Surah metadata, loaded once with ``manage.py load_surahs``."""
    number = models.PositiveSmallIntegerField(unique=True)
    name = models.CharField(max_length=64)
    name_arabic = models.CharField(max_length=64, blank=True)
    total_ayat = models.PositiveSmallIntegerField()
    juz = models.PositiveSmallIntegerField(help_text="Juz tempat surah berada (1-30)")

    class Meta:
        ordering = ["number"]

    def __str__(self):
        return f"{self.number}. {self.name}"


class HafalanRecord(SoftDeleteModel):
    """One setoran: a student recited ayat start..end of a surah."""
    STATUS_BELUM_DIHAFAL = "BELUM_DIHAFAL"
    STATUS_SEDANG_DIHAFAL = "SEDANG_DIHAFAL"
    STATUS_LANCAR = "LANCAR"
    STATUS_MUTQIN = "MUTQIN"
    STATUS_CHOICES = [
        (STATUS_BELUM_DIHAFAL, "Belum dihafal"),
        (STATUS_SEDANG_DIHAFAL, "Sedang dihafal"),
        (STATUS_LANCAR, "Lancar"),
        (STATUS_MUTQIN, "Mutqin"),
    ]

    QUALITY_CHOICES = [("A", "A"), ("B", "B"), ("C", "C"), ("D", "D")]

    METHOD_INDIVIDUAL = "INDIVIDUAL"
    METHOD_GROUP = "GROUP"
    METHOD_CHOICES = [(METHOD_INDIVIDUAL, "Individu"), (METHOD_GROUP, "Kelompok")]

    student = models.ForeignKey(
        Profile,
        on_delete=models.CASCADE,
        related_name="hafalan_records",
        limit_choices_to={"role": Profile.ROLE_STUDENT},
    )
    surah = models.ForeignKey(Surah, on_delete=models.PROTECT, related_name="records")
    teacher = models.ForeignKey(
        Profile,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="recorded_hafalan",
    )
    date = models.DateField(default=timezone.localdate)
    start_ayat = models.PositiveSmallIntegerField()
    end_ayat = models.PositiveSmallIntegerField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    quality = models.CharField(max_length=1, choices=QUALITY_CHOICES, default="B")
    fluency = models.CharField(max_length=20, blank=True)
    tajweed = models.CharField(max_length=20, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text="Menit")
    method = models.CharField(max_length=12, choices=METHOD_CHOICES, default=METHOD_INDIVIDUAL)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return f"{self.student} {self.surah.name} {self.start_ayat}-{self.end_ayat} ({self.status})"

    @property
    def ayat_count(self):
        return self.end_ayat - self.start_ayat + 1


class HafalanProgress(SoftDeleteModel):
    """
    Per-student summary derived from HafalanRecord rows.
    Never edited by hand: see ``apps.hafalan.progress.update_student_progress``.
    """
    student = models.OneToOneField(Profile, on_delete=models.CASCADE, related_name="hafalan_progress")
    total_surah = models.PositiveIntegerField(default=0)
    total_ayat = models.PositiveIntegerField(default=0)
    total_juz = models.PositiveSmallIntegerField(default=0)
    juz30_progress = models.FloatField(default=0)
    overall_progress = models.FloatField(default=0)
    avg_quality = models.FloatField(default=0)
    total_sessions = models.PositiveIntegerField(default=0)
    last_setoran_date = models.DateTimeField(null=True, blank=True)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "hafalan progress"

    def __str__(self):
        return f"{self.student} {self.overall_progress}%"


class HafalanAchievement(SoftDeleteModel):
    TYPE_SURAH_COMPLETE = "SURAH_COMPLETE"
    TYPE_CHOICES = [(TYPE_SURAH_COMPLETE, "Surah selesai")]

    LEVEL_BRONZE = "BRONZE"
    LEVEL_SILVER = "SILVER"
    LEVEL_GOLD = "GOLD"
    LEVEL_CHOICES = [(LEVEL_BRONZE, "Perunggu"), (LEVEL_SILVER, "Perak"), (LEVEL_GOLD, "Emas")]

    student = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name="hafalan_achievements")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_SURAH_COMPLETE)
    surah = models.ForeignKey(Surah, null=True, blank=True, on_delete=models.SET_NULL, related_name="+")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    level = models.CharField(max_length=10, choices=LEVEL_CHOICES, default=LEVEL_BRONZE)
    points = models.PositiveIntegerField(default=0)
    verified_by = models.ForeignKey(
        Profile, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )
    earned_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-earned_at"]

    def __str__(self):
        return self.title
