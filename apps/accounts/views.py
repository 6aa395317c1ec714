# apps/accounts/views.py
import logging

from django.db.models import Count
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from apps.core.api import date_param, deleted_filter, get_or_404, json_view, paginate, parse_json, raise_form_errors
from apps.core.errors import Forbidden
from apps.core.softdelete import Repository, only_deleted

from .forms import AttendanceForm
from .models import Attendance, Profile
from .permissions import (
    get_visible_student,
    is_admin,
    require_admin,
    require_staff_member,
    teaches,
    visible_students_where,
)

logger = logging.getLogger(__name__)


# ========= Serialization =========

def profile_data(profile):
    return {
        "id": profile.id,
        "username": profile.user.username,
        "full_name": profile.full_name,
        "nis": profile.nis,
        "role": profile.role,
        "gender": profile.gender,
        "halaqa": {"id": profile.halaqa_id, "name": profile.halaqa.name} if profile.halaqa_id else None,
        "is_deleted": profile.is_deleted,
        "deleted_at": profile.deleted_at,
    }


def attendance_data(attendance):
    return {
        "id": attendance.id,
        "student_id": attendance.student_id,
        "date": attendance.date,
        "status": attendance.status,
        "notes": attendance.notes,
    }


def attendance_rate(counts):
    """Percentage of days attended (present or late); 0 when nothing is recorded."""
    total = sum(counts.values())
    if not total:
        return 0
    attended = sum(counts.get(status, 0) for status in Attendance.ATTENDED)
    return round(attended / total * 100, 2)


# ========= Students =========

@require_GET
@json_view
def student_list(request):
    where = visible_students_where(request.user)

    halaqa_id = request.GET.get("halaqa")
    if halaqa_id and halaqa_id.isdigit():
        where["halaqa_id"] = int(halaqa_id)
    search = (request.GET.get("q") or "").strip()
    if search:
        where["user__username__icontains"] = search

    where, scoped = deleted_filter(request, where, allowed=is_admin(request.user))
    students = (Repository(Profile)
                .find_many(where, order_by=("user__username",), scoped=scoped)
                .select_related("user", "halaqa")
                .distinct())

    items, pagination = paginate(request, students)
    return JsonResponse({
        "students": [profile_data(s) for s in items],
        "pagination": pagination,
    })


@require_http_methods(["GET", "DELETE"])
@json_view
def student_detail(request, student_id):
    if request.method == "GET":
        student = get_visible_student(request.user, student_id)
        return JsonResponse({"student": profile_data(student)})

    require_admin(request.user)
    repo = Repository(Profile, actor=request.user)
    student = get_or_404(repo, {"pk": student_id, "role": Profile.ROLE_STUDENT}, "Santri tidak ditemukan.")
    repo.delete({"pk": student.pk})
    return JsonResponse({"status": "success", "message": "Santri berhasil dihapus."})


@require_POST
@json_view
def student_restore(request, student_id):
    require_admin(request.user)
    repo = Repository(Profile, actor=request.user)
    student = get_or_404(
        repo,
        only_deleted({"pk": student_id, "role": Profile.ROLE_STUDENT}),
        "Santri yang dihapus tidak ditemukan.",
    )
    student = repo.restore({"pk": student.pk})
    return JsonResponse({
        "status": "success",
        "message": "Santri berhasil dipulihkan.",
        "student": profile_data(student),
    })


# ========= Attendance =========

@require_POST
@json_view
def record_attendance(request):
    recorder = require_staff_member(request.user)

    form = AttendanceForm(parse_json(request))
    if not form.is_valid():
        raise_form_errors(form)
    data = form.cleaned_data
    student = data["student"]

    if not is_admin(request.user) and not teaches(recorder, student):
        raise Forbidden("Santri ini bukan anggota halaqah Anda.")

    repo = Repository(Attendance, actor=request.user)
    fields = {"status": data["status"], "notes": data["notes"], "recorded_by": recorder}
    existing = repo.find_first({"student": student, "date": data["date"]})
    if existing:
        attendance = repo.update({"pk": existing.pk}, fields)
        created = False
    else:
        attendance = repo.create(student=student, date=data["date"], **fields)
        created = True

    logger.info("Attendance %s for student=%s on %s", data["status"], student.pk, data["date"])
    return JsonResponse({
        "status": "success",
        "message": "Kehadiran berhasil disimpan.",
        "attendance": attendance_data(attendance),
    }, status=201 if created else 200)


@require_GET
@json_view
def attendance_summary(request, student_id):
    student = get_visible_student(request.user, student_id)

    where = {"student": student}
    date_from, date_to = date_param(request, "date_from"), date_param(request, "date_to")
    if date_from:
        where["date__gte"] = date_from
    if date_to:
        where["date__lte"] = date_to

    records = Repository(Attendance).find_many(where)
    counts = {
        row["status"]: row["count"]
        for row in records.order_by().values("status").annotate(count=Count("id"))
    }
    return JsonResponse({
        "student_id": student.id,
        "total_days": sum(counts.values()),
        "counts": {status: counts.get(status, 0) for status, _ in Attendance.STATUS_CHOICES},
        "attendance_percentage": attendance_rate(counts),
        "recent": [attendance_data(a) for a in records[:7]],
    })
