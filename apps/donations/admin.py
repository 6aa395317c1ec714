from django.contrib import admin

from apps.core.admin import SoftDeleteAdmin

from .models import Donation, DonationCampaign, DonorProfile


@admin.register(DonationCampaign)
class DonationCampaignAdmin(SoftDeleteAdmin):
    list_display = ('title', 'status', 'target_amount', 'current_amount', 'end_date', 'is_featured')
    list_filter = ('status', 'is_featured', 'is_urgent')
    search_fields = ('title', 'slug')
    prepopulated_fields = {'slug': ('title',)}
    readonly_fields = ('current_amount',)


@admin.register(Donation)
class DonationAdmin(SoftDeleteAdmin):
    list_display = ('donation_no', 'campaign', 'amount', 'donor_name', 'payment_method', 'payment_status', 'created_at')
    list_filter = ('payment_status', 'payment_method', 'campaign')
    search_fields = ('donation_no', 'donor_name', 'donor_email')
    readonly_fields = ('donation_no', 'verified_by', 'verified_at')


@admin.register(DonorProfile)
class DonorProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'total_donated', 'donation_count', 'last_donation_at')
    search_fields = ('name', 'email')
