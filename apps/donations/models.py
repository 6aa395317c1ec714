from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.softdelete import SoftDeleteModel


class DonationCampaign(SoftDeleteModel):
    STATUS_DRAFT = "DRAFT"
    STATUS_ACTIVE = "ACTIVE"
    STATUS_COMPLETED = "COMPLETED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draf"),
        (STATUS_ACTIVE, "Aktif"),
        (STATUS_COMPLETED, "Selesai"),
        (STATUS_CANCELLED, "Dibatalkan"),
    ]
    PUBLIC_STATUSES = (STATUS_ACTIVE, STATUS_COMPLETED)

    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.TextField(blank=True)
    target_amount = models.DecimalField(max_digits=15, decimal_places=2)
    current_amount = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_DRAFT)
    start_date = models.DateTimeField(default=timezone.now)
    end_date = models.DateTimeField(null=True, blank=True)
    allow_anonymous = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    is_urgent = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-is_featured", "-is_urgent", "-created_at"]

    def __str__(self):
        return self.title

    @property
    def has_ended(self):
        return self.end_date is not None and timezone.now() > self.end_date


class Donation(SoftDeleteModel):
    METHOD_TRANSFER = "TRANSFER"
    METHOD_VA = "VA"
    METHOD_EWALLET = "EWALLET"
    METHOD_QRIS = "QRIS"
    METHOD_CASH = "CASH"
    METHOD_CHOICES = [
        (METHOD_TRANSFER, "Transfer bank"),
        (METHOD_VA, "Virtual account"),
        (METHOD_EWALLET, "E-wallet"),
        (METHOD_QRIS, "QRIS"),
        (METHOD_CASH, "Tunai"),
    ]

    STATUS_PENDING = "PENDING"
    STATUS_VERIFIED = "VERIFIED"
    STATUS_FAILED = "FAILED"
    STATUS_CANCELLED = "CANCELLED"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Menunggu"),
        (STATUS_VERIFIED, "Terverifikasi"),
        (STATUS_FAILED, "Gagal"),
        (STATUS_CANCELLED, "Dibatalkan"),
    ]

    donation_no = models.CharField(max_length=20, unique=True)
    campaign = models.ForeignKey(DonationCampaign, on_delete=models.PROTECT, related_name="donations")
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    message = models.TextField(blank=True)
    donor_name = models.CharField(max_length=150, blank=True)
    donor_email = models.EmailField(blank=True)
    donor_phone = models.CharField(max_length=30, blank=True)
    is_anonymous = models.BooleanField(default=False)
    payment_method = models.CharField(max_length=10, choices=METHOD_CHOICES)
    payment_channel = models.CharField(max_length=50, blank=True)
    payment_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING)
    source = models.CharField(max_length=20, default="WEB")
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name="+"
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.donation_no} ({self.amount})"


class DonorProfile(models.Model):
    """Running totals per donor email. Not tombstoned: deletes are physical."""
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150)
    phone = models.CharField(max_length=30, blank=True)
    total_donated = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    donation_count = models.PositiveIntegerField(default=0)
    last_donation_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"{self.name} <{self.email}>"
