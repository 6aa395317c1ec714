# apps/hafalan/views.py
import logging
from collections import defaultdict
from datetime import timedelta

from django.db.models import Avg, Count, F, Max, Sum
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from apps.accounts.models import Profile
from apps.accounts.permissions import (
    get_visible_student,
    is_admin,
    profile_for,
    require_admin,
    require_staff_member,
    teaches,
)
from apps.core.api import date_param, deleted_filter, json_view, paginate, parse_json, raise_form_errors
from apps.core.errors import Forbidden, NotFound, ValidationFailed
from apps.core.softdelete import Repository, only_deleted

from .achievements import award_surah_completion
from .forms import HafalanRecordForm, record_form_data
from .models import HafalanAchievement, HafalanProgress, HafalanRecord, Surah
from .progress import mastered_surahs, update_student_progress

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30, "quarter": 90, "year": 365}


# ========= Serialization =========

def record_data(record):
    return {
        "id": record.id,
        "student": {"id": record.student_id, "name": record.student.full_name},
        "teacher": {"id": record.teacher_id, "name": record.teacher.full_name} if record.teacher_id else None,
        "surah": {"number": record.surah.number, "name": record.surah.name, "total_ayat": record.surah.total_ayat},
        "date": record.date,
        "start_ayat": record.start_ayat,
        "end_ayat": record.end_ayat,
        "ayat_count": record.ayat_count,
        "status": record.status,
        "quality": record.quality,
        "fluency": record.fluency,
        "tajweed": record.tajweed,
        "duration": record.duration,
        "method": record.method,
        "notes": record.notes,
        "is_deleted": record.is_deleted,
        "deleted_at": record.deleted_at,
    }


def progress_data(progress):
    return {
        "total_surah": progress.total_surah,
        "total_ayat": progress.total_ayat,
        "total_juz": progress.total_juz,
        "juz30_progress": progress.juz30_progress,
        "overall_progress": progress.overall_progress,
        "avg_quality": progress.avg_quality,
        "total_sessions": progress.total_sessions,
        "last_setoran_date": progress.last_setoran_date,
    }


def achievement_data(achievement):
    return {
        "id": achievement.id,
        "type": achievement.type,
        "title": achievement.title,
        "description": achievement.description,
        "level": achievement.level,
        "points": achievement.points,
        "surah": achievement.surah.number if achievement.surah_id else None,
        "earned_at": achievement.earned_at,
    }


# ========= Helpers =========

def visible_records_where(user):
    """Admins see every record, teachers their halaqat, students their own."""
    if is_admin(user):
        return {}
    profile = profile_for(user)
    if profile is None:
        raise Forbidden("Profil Anda tidak aktif.")
    if profile.role == Profile.ROLE_TEACHER:
        return {"student__halaqa__teachers": profile}
    return {"student": profile}


def get_record_for_update(user, record_id):
    """
    A live record ``user`` may change: its recording teacher or an admin.
    Tombstoned or missing records are 404.
    """
    record = (Repository(HafalanRecord)
              .find_many({"pk": record_id})
              .select_related("student__user", "teacher__user", "surah")
              .first())
    if record is None:
        raise NotFound("Data hafalan tidak ditemukan.")
    if is_admin(user):
        return record
    profile = profile_for(user)
    if profile is None or record.teacher_id != profile.pk:
        raise Forbidden("Anda tidak memiliki akses untuk mengubah data hafalan ini.")
    return record


def check_surah(payload):
    number = payload.get("surah")
    if number in (None, ""):
        return
    try:
        exists = Surah.objects.filter(number=int(number)).exists()
    except (TypeError, ValueError):
        raise ValidationFailed("Nomor surah harus berupa angka.")
    if not exists:
        raise NotFound("Surah tidak ditemukan.")


def recompute_after_change(record, verified_by=None):
    progress = update_student_progress(record.student)
    achievement = None
    if record.status == HafalanRecord.STATUS_MUTQIN and not record.is_deleted:
        achievement = award_surah_completion(record.student, record.surah, verified_by=verified_by)
    return progress, achievement


# ========= Records =========

@require_http_methods(["GET", "POST"])
@json_view
def record_list(request):
    if request.method == "POST":
        return _create_record(request)

    where = visible_records_where(request.user)
    for param, lookup in (("student", "student_id"), ("teacher", "teacher_id"), ("surah", "surah__number")):
        value = request.GET.get(param)
        if value:
            if not value.isdigit():
                raise ValidationFailed(f"Parameter '{param}' harus berupa angka.")
            where[lookup] = int(value)
    status = request.GET.get("status")
    if status:
        where["status"] = status
    date_from, date_to = date_param(request, "date_from"), date_param(request, "date_to")
    if date_from:
        where["date__gte"] = date_from
    if date_to:
        where["date__lte"] = date_to

    where, scoped = deleted_filter(request, where, allowed=is_admin(request.user))
    records = (Repository(HafalanRecord)
               .find_many(where, scoped=scoped)
               .select_related("student__user", "teacher__user", "surah")
               .distinct())

    items, pagination = paginate(request, records)
    return JsonResponse({
        "records": [record_data(r) for r in items],
        "pagination": pagination,
    })


def _create_record(request):
    recorder = require_staff_member(request.user)
    payload = parse_json(request)
    check_surah(payload)

    form = HafalanRecordForm(payload)
    if not form.is_valid():
        raise_form_errors(form)
    student = form.cleaned_data["student"]
    if not is_admin(request.user) and not teaches(recorder, student):
        raise Forbidden("Santri ini bukan anggota halaqah Anda.")

    record = form.save(commit=False)
    record.teacher = recorder
    record.save()
    logger.info(
        "Hafalan recorded student=%s surah=%s %s-%s status=%s by=%s",
        student.pk, record.surah.number, record.start_ayat, record.end_ayat, record.status,
        recorder.pk if recorder else None,
    )

    progress, achievement = recompute_after_change(record, verified_by=recorder)
    return JsonResponse({
        "status": "success",
        "message": "Hafalan berhasil dicatat.",
        "record": record_data(record),
        "progress": progress_data(progress),
        "achievement": achievement_data(achievement) if achievement else None,
    }, status=201)


@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@json_view
def record_detail(request, record_id):
    if request.method == "GET":
        where = visible_records_where(request.user)
        where["pk"] = record_id
        record = (Repository(HafalanRecord)
                  .find_many(where)
                  .select_related("student__user", "teacher__user", "surah")
                  .first())
        if record is None:
            raise NotFound("Data hafalan tidak ditemukan.")
        return JsonResponse({"record": record_data(record)})

    record = get_record_for_update(request.user, record_id)

    if request.method == "DELETE":
        Repository(HafalanRecord, actor=request.user).delete({"pk": record.pk})
        update_student_progress(record.student)
        return JsonResponse({"status": "success", "message": "Data hafalan berhasil dihapus."})

    payload = parse_json(request)
    check_surah(payload)
    data = record_form_data(record)
    data.update(payload)
    # the student of a record is fixed
    data["student"] = record.student_id

    form = HafalanRecordForm(data, instance=record)
    if not form.is_valid():
        raise_form_errors(form)
    record = form.save()

    progress, achievement = recompute_after_change(record, verified_by=profile_for(request.user))
    return JsonResponse({
        "status": "success",
        "message": "Data hafalan berhasil diperbarui.",
        "record": record_data(record),
        "progress": progress_data(progress),
        "achievement": achievement_data(achievement) if achievement else None,
    })


@require_POST
@json_view
def record_restore(request, record_id):
    require_admin(request.user)
    repo = Repository(HafalanRecord, actor=request.user)
    if repo.find_unique(only_deleted({"pk": record_id})) is None:
        raise NotFound("Data hafalan yang dihapus tidak ditemukan.")
    record = repo.restore({"pk": record_id})
    progress, achievement = recompute_after_change(record)
    return JsonResponse({
        "status": "success",
        "message": "Data hafalan berhasil dipulihkan.",
        "record": record_data(record),
        "progress": progress_data(progress),
    })


# ========= Progress =========

def surah_statuses(records, surahs):
    """Per-surah status: MUTQIN when fully mastered, else the latest status."""
    mastered = set(mastered_surahs(records))
    latest = {}
    covered = defaultdict(set)
    for record in records:  # ordered by date, id
        number = record.surah.number
        latest[number] = record.status
        covered[number].update(range(record.start_ayat, record.end_ayat + 1))

    result = []
    for surah in surahs:
        if surah.number in mastered:
            status = HafalanRecord.STATUS_MUTQIN
        else:
            status = latest.get(surah.number, HafalanRecord.STATUS_BELUM_DIHAFAL)
        memorized = len(covered.get(surah.number, ()))
        result.append({
            "number": surah.number,
            "name": surah.name,
            "juz": surah.juz,
            "total_ayat": surah.total_ayat,
            "status": status,
            "memorized_ayat": memorized,
            "percentage": round(min(memorized / surah.total_ayat * 100, 100), 2) if surah.total_ayat else 0,
        })
    return result


def juz_progress(statuses):
    totals = defaultdict(lambda: {"total_ayat": 0, "memorized_ayat": 0})
    for item in statuses:
        entry = totals[item["juz"]]
        entry["total_ayat"] += item["total_ayat"]
        entry["memorized_ayat"] += item["memorized_ayat"]
    return [
        {
            "juz": juz,
            "total_ayat": entry["total_ayat"],
            "memorized_ayat": entry["memorized_ayat"],
            "percentage": round(entry["memorized_ayat"] / entry["total_ayat"] * 100, 2) if entry["total_ayat"] else 0,
        }
        for juz, entry in sorted(totals.items())
    ]


@require_GET
@json_view
def student_progress(request, student_id):
    student = get_visible_student(request.user, student_id)

    progress = Repository(HafalanProgress).find_unique({"student": student})
    if progress is None:
        # a student without records has an all-zero summary
        progress = HafalanProgress(student=student)

    records = list(Repository(HafalanRecord)
                   .find_many({"student": student}, order_by=("date", "id"))
                   .select_related("surah"))
    statuses = surah_statuses(records, Surah.objects.all())

    response = {
        "student": {"id": student.id, "name": student.full_name, "nis": student.nis},
        "progress": progress_data(progress),
        "surahs": statuses,
        "juz": juz_progress(statuses),
        "achievements": [
            achievement_data(a)
            for a in Repository(HafalanAchievement).find_many({"student": student}).select_related("surah")[:5]
        ],
    }
    if request.GET.get("include_recent") in ("1", "true"):
        response["recent_records"] = [record_data(r) for r in reversed(records[-10:])]
    return JsonResponse(response)


# ========= Statistics =========

@require_GET
@json_view
def statistics(request):
    require_staff_member(request.user)
    period = request.GET.get("period", "month")
    if period not in PERIOD_DAYS:
        raise ValidationFailed("Parameter 'period' harus week, month, quarter, atau year.")
    start = timezone.localdate() - timedelta(days=PERIOD_DAYS[period])

    # teachers see their own halaqat only, as in the record list
    where = visible_records_where(request.user)
    records = Repository(HafalanRecord).find_many({**where, "date__gte": start}).order_by()
    summaries = Repository(HafalanProgress).find_many(where)

    quality = {row["quality"]: row["n"] for row in records.values("quality").annotate(n=Count("id"))}
    status = {row["status"]: row["n"] for row in records.values("status").annotate(n=Count("id"))}
    averages = summaries.aggregate(
        avg_overall=Avg("overall_progress"),
        avg_juz30=Avg("juz30_progress"),
        avg_quality=Avg("avg_quality"),
    )

    top = (summaries.select_related("student__user")
           .order_by("-total_ayat", "-avg_quality")[:10])
    popular = (records.values("surah__number", "surah__name")
               .annotate(sessions=Count("id"), ayat=Sum(F("end_ayat") - F("start_ayat") + 1))
               .order_by("-sessions", "surah__number")[:10])

    return JsonResponse({
        "period": period,
        "start_date": start,
        "total_records": records.count(),
        "active_students": records.values("student").distinct().count(),
        "last_setoran": records.aggregate(last=Max("date"))["last"],
        "quality_distribution": {q: quality.get(q, 0) for q, _ in HafalanRecord.QUALITY_CHOICES},
        "status_distribution": {s: status.get(s, 0) for s, _ in HafalanRecord.STATUS_CHOICES},
        "averages": {key: round(value or 0, 2) for key, value in averages.items()},
        "top_performers": [
            {"student_id": p.student_id, "name": p.student.full_name, **progress_data(p)}
            for p in top
        ],
        "most_memorized_surahs": [
            {"number": row["surah__number"], "name": row["surah__name"],
             "sessions": row["sessions"], "ayat": row["ayat"]}
            for row in popular
        ],
    })
