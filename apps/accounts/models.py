from django.db import models
from django.db.models import Q
from django.contrib.auth.models import User
from django.utils import timezone

from apps.core.softdelete import SoftDeleteModel

# ==============================================================================
# Halaqa, Profile
# ==============================================================================

class Halaqa(SoftDeleteModel):
    """Study circle: students recite to one or more teachers."""
    name = models.CharField(max_length=150, unique=True)
    juz_from = models.PositiveSmallIntegerField(null=True, blank=True)
    juz_to = models.PositiveSmallIntegerField(null=True, blank=True)
    teachers = models.ManyToManyField(
        "Profile",
        related_name="halaqat_as_teacher",
        blank=True,
        limit_choices_to={"role": "teacher"},
    )

    def __str__(self):
        return self.name


class Profile(SoftDeleteModel):
    """User profile (student / teacher / admin)."""
    ROLE_STUDENT = "student"
    ROLE_TEACHER = "teacher"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = ((ROLE_STUDENT, "Santri"), (ROLE_TEACHER, "Ustadz"), (ROLE_ADMIN, "Admin"))

    GENDER_MALE = "male"
    GENDER_FEMALE = "female"
    GENDER_CHOICES = ((GENDER_MALE, "Laki-laki"), (GENDER_FEMALE, "Perempuan"))

    TEACHER_PENDING = "pending"
    TEACHER_APPROVED = "approved"
    TEACHER_REJECTED = "rejected"
    TEACHER_STATUS_CHOICES = (
        (TEACHER_PENDING, "Pending"),
        (TEACHER_APPROVED, "Approved"),
        (TEACHER_REJECTED, "Rejected"),
    )

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_STUDENT)
    nis = models.CharField("NIS", max_length=20, unique=True, null=True, blank=True)
    halaqa = models.ForeignKey(
        Halaqa, null=True, blank=True, on_delete=models.SET_NULL, related_name="students"
    )
    gender = models.CharField(max_length=6, choices=GENDER_CHOICES, null=True, blank=True)
    birth_date = models.DateField(null=True, blank=True)
    guardian_phone = models.CharField(max_length=30, null=True, blank=True)
    institution = models.CharField(max_length=255, null=True, blank=True)
    teacher_status = models.CharField(
        max_length=10, choices=TEACHER_STATUS_CHOICES, default=TEACHER_PENDING
    )
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.user.username} ({self.role})"

    @property
    def full_name(self):
        return self.user.get_full_name() or self.user.username

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.user.is_staff

    def clean(self):
        super().clean()
        if self.role != self.ROLE_TEACHER:
            self.teacher_status = self.TEACHER_APPROVED

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

# ==============================================================================
# Attendance
# ==============================================================================

class Attendance(SoftDeleteModel):
    STATUS_PRESENT = "present"
    STATUS_ABSENT = "absent"
    STATUS_LATE = "late"
    STATUS_SICK = "sick"
    STATUS_PERMIT = "permit"
    STATUS_CHOICES = [
        (STATUS_PRESENT, "Hadir"),
        (STATUS_ABSENT, "Alpa"),
        (STATUS_LATE, "Terlambat"),
        (STATUS_SICK, "Sakit"),
        (STATUS_PERMIT, "Izin"),
    ]
    # Counted as attended in the attendance percentage.
    ATTENDED = (STATUS_PRESENT, STATUS_LATE)

    student = models.ForeignKey(
        Profile,
        on_delete=models.CASCADE,
        related_name="attendance_records",
        limit_choices_to={"role": Profile.ROLE_STUDENT},
    )
    date = models.DateField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PRESENT)
    notes = models.CharField(max_length=255, blank=True)
    recorded_by = models.ForeignKey(
        Profile, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )

    class Meta:
        ordering = ["-date"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "date"],
                condition=Q(is_deleted=False),
                name="unique_live_attendance_per_day",
            ),
        ]

    def __str__(self):
        return f"{self.student} {self.date} {self.status}"
