# apps/donations/views.py
import logging

from django.db import DatabaseError, transaction
from django.db.models import F
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.accounts.permissions import is_admin, require_admin
from apps.core.api import deleted_filter, get_or_404, json_view, paginate, parse_json, raise_form_errors
from apps.core.errors import Conflict, NotFound, ValidationFailed
from apps.core.softdelete import Repository

from .forms import DonationForm
from .models import Donation, DonationCampaign, DonorProfile

logger = logging.getLogger(__name__)


# ========= Serialization =========

def campaign_data(campaign):
    return {
        "id": campaign.id,
        "title": campaign.title,
        "slug": campaign.slug,
        "description": campaign.description,
        "status": campaign.status,
        "target_amount": float(campaign.target_amount),
        "current_amount": float(campaign.current_amount),
        "start_date": campaign.start_date,
        "end_date": campaign.end_date,
        "allow_anonymous": campaign.allow_anonymous,
        "is_featured": campaign.is_featured,
        "is_urgent": campaign.is_urgent,
    }


def donation_data(donation):
    return {
        "id": donation.id,
        "donation_no": donation.donation_no,
        "campaign": {"id": donation.campaign_id, "title": donation.campaign.title},
        "amount": float(donation.amount),
        "donor_name": None if donation.is_anonymous else donation.donor_name,
        "is_anonymous": donation.is_anonymous,
        "payment_method": donation.payment_method,
        "payment_status": donation.payment_status,
        "verified_at": donation.verified_at,
        "created_at": donation.created_at,
        "is_deleted": donation.is_deleted,
        "deleted_at": donation.deleted_at,
    }


# ========= Helpers =========

def next_donation_no(now=None):
    """``DON-YYYYMM-NNNN``; the sequence restarts every month."""
    now = now or timezone.localtime()
    prefix = f"DON-{now:%Y%m}"
    # tombstoned donations still hold their numbers
    last = Repository(Donation).find_first(
        {"donation_no__startswith": prefix}, order_by=("-donation_no",), scoped=False
    )
    sequence = 1
    if last is not None:
        try:
            sequence = int(last.donation_no.rsplit("-", 1)[1]) + 1
        except (IndexError, ValueError):
            sequence = 1
    return f"{prefix}-{sequence:04d}"


def record_donor(email, name, phone, amount):
    """Best-effort running totals per donor; a failure never fails the donation."""
    now = timezone.now()
    try:
        with transaction.atomic():
            profile, created = DonorProfile.objects.get_or_create(
                email=email,
                defaults={
                    "name": name,
                    "phone": phone,
                    "total_donated": amount,
                    "donation_count": 1,
                    "last_donation_at": now,
                },
            )
            if not created:
                DonorProfile.objects.filter(pk=profile.pk).update(
                    name=name,
                    phone=phone,
                    total_donated=F("total_donated") + amount,
                    donation_count=F("donation_count") + 1,
                    last_donation_at=now,
                )
    except DatabaseError:
        logger.exception("Donor profile upsert failed for %s", email)


# ========= Campaigns =========

@require_GET
@json_view(login=False)
def campaign_list(request):
    where = {}
    status = request.GET.get("status")
    if not is_admin(request.user):
        where["status__in"] = DonationCampaign.PUBLIC_STATUSES
    if status:
        where["status"] = status
    if request.GET.get("featured") == "true":
        where["is_featured"] = True
    if request.GET.get("urgent") == "true":
        where["is_urgent"] = True
    search = (request.GET.get("search") or "").strip()
    if search:
        where["title__icontains"] = search

    where, scoped = deleted_filter(request, where, allowed=is_admin(request.user))
    items, pagination = paginate(request, Repository(DonationCampaign).find_many(where, scoped=scoped))
    return JsonResponse({
        "campaigns": [campaign_data(c) for c in items],
        "pagination": pagination,
    })


@csrf_exempt
@require_POST
@json_view(login=False)
def donate(request, campaign_id):
    form = DonationForm(parse_json(request))
    if not form.is_valid():
        raise_form_errors(form)
    data = form.cleaned_data
    anonymous = data["is_anonymous"]

    campaign = get_or_404(Repository(DonationCampaign), {"pk": campaign_id}, "Campaign tidak ditemukan")
    if campaign.status != DonationCampaign.STATUS_ACTIVE:
        raise ValidationFailed("Campaign tidak aktif")
    if campaign.has_ended:
        raise ValidationFailed("Campaign sudah berakhir")
    if anonymous and not campaign.allow_anonymous:
        raise ValidationFailed("Campaign ini tidak menerima donasi anonim")

    with transaction.atomic():
        donation = Repository(Donation).create(
            donation_no=next_donation_no(),
            campaign=campaign,
            amount=data["amount"],
            message=data["message"],
            donor_name="" if anonymous else data["donor_name"],
            donor_email="" if anonymous else data["donor_email"],
            donor_phone="" if anonymous else data["donor_phone"],
            is_anonymous=anonymous,
            payment_method=data["payment_method"],
            payment_channel=data["payment_channel"],
        )
    logger.info("Donation %s created for campaign=%s amount=%s", donation.donation_no, campaign.pk, donation.amount)

    if not anonymous:
        record_donor(data["donor_email"], data["donor_name"], data["donor_phone"], data["amount"])

    # current_amount moves only when the donation is verified
    return JsonResponse({
        "status": "success",
        "message": "Donasi berhasil dibuat.",
        "donation": donation_data(donation),
    }, status=201)


# ========= Donations (admin) =========

@require_GET
@json_view
def donation_list(request):
    require_admin(request.user)
    where = {}
    for param, lookup in (("campaign", "campaign_id"), ("status", "payment_status")):
        value = request.GET.get(param)
        if value:
            where[lookup] = value
    if "campaign_id" in where and not where["campaign_id"].isdigit():
        raise ValidationFailed("Parameter 'campaign' harus berupa angka.")

    where, scoped = deleted_filter(request, where, allowed=True)
    donations = Repository(Donation).find_many(where, scoped=scoped).select_related("campaign")
    items, pagination = paginate(request, donations)
    return JsonResponse({
        "donations": [donation_data(d) for d in items],
        "pagination": pagination,
    })


@require_POST
@json_view
def verify_donation(request, donation_id):
    require_admin(request.user)
    with transaction.atomic():
        donation = (Repository(Donation)
                    .find_many({"pk": donation_id})
                    .select_for_update()
                    .select_related("campaign")
                    .first())
        if donation is None:
            raise NotFound("Donasi tidak ditemukan.")
        if donation.payment_status == Donation.STATUS_VERIFIED:
            raise Conflict("Donasi sudah diverifikasi.")
        if donation.payment_status != Donation.STATUS_PENDING:
            raise Conflict("Hanya donasi yang menunggu yang dapat diverifikasi.")

        donation = Repository(Donation).update({"pk": donation.pk}, {
            "payment_status": Donation.STATUS_VERIFIED,
            "verified_by": request.user,
            "verified_at": timezone.now(),
        })
        Repository(DonationCampaign).update_many(
            {"pk": donation.campaign_id},
            {"current_amount": F("current_amount") + donation.amount},
        )

    logger.info("Donation %s verified by user=%s", donation.donation_no, request.user.pk)
    donation.campaign.refresh_from_db()
    return JsonResponse({
        "status": "success",
        "message": "Donasi berhasil diverifikasi.",
        "donation": donation_data(donation),
        "campaign": campaign_data(donation.campaign),
    })


@require_http_methods(["DELETE"])
@json_view
def donation_detail(request, donation_id):
    require_admin(request.user)
    repo = Repository(Donation, actor=request.user)
    donation = get_or_404(repo, {"pk": donation_id}, "Donasi tidak ditemukan.")
    if donation.payment_status == Donation.STATUS_VERIFIED:
        raise Conflict("Donasi yang sudah diverifikasi tidak dapat dihapus.")
    repo.delete({"pk": donation.pk})
    return JsonResponse({"status": "success", "message": "Donasi berhasil dihapus."})
