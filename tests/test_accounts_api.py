import pytest
from django.core.management import call_command
from django.test import Client

from apps.accounts.models import Attendance, Halaqa, Profile
from apps.accounts.views import attendance_rate

from conftest import make_profile, post_json


class TestAttendanceRate:

    def test_zero_safe(self):
        assert attendance_rate({}) == 0

    def test_late_counts_as_attended(self):
        assert attendance_rate({"present": 1, "late": 1, "absent": 1}) == 66.67


@pytest.mark.django_db
class TestProfileSignal:

    def test_profile_created_with_user(self):
        profile = make_profile("santri_baru")
        assert profile.role == Profile.ROLE_STUDENT
        assert profile.teacher_status == Profile.TEACHER_APPROVED

    def test_pending_teacher_is_inactive(self):
        profile = make_profile("ustadz_baru", Profile.ROLE_TEACHER)
        profile.teacher_status = Profile.TEACHER_PENDING
        profile.save()
        profile.user.refresh_from_db()
        assert profile.user.is_active is False

    def test_teacher_approval_round_trip(self):
        profile = make_profile("ustadz_hasan", Profile.ROLE_TEACHER)
        assert profile.user.is_active is True

        profile.teacher_status = Profile.TEACHER_REJECTED
        profile.save()
        profile.user.refresh_from_db()
        assert profile.user.is_active is False

        profile.teacher_status = Profile.TEACHER_APPROVED
        profile.save()
        profile.user.refresh_from_db()
        assert profile.user.is_active is True

    def test_student_activity_untouched(self):
        profile = make_profile("santri_nonaktif")
        profile.user.is_active = False
        profile.user.save()
        profile.save()
        profile.user.refresh_from_db()
        assert profile.user.is_active is False


@pytest.mark.django_db
class TestSeedHalaqas:

    def test_idempotent(self):
        call_command("seed_halaqas")
        count = Halaqa.objects.count()
        call_command("seed_halaqas")
        assert count == 10
        assert Halaqa.objects.count() == count


@pytest.mark.django_db
class TestStudents:

    def test_teacher_lists_own_halaqa(self, teacher_client, student):
        make_profile("santri_lain")
        body = teacher_client.get("/api/accounts/students/").json()
        assert [s["id"] for s in body["students"]] == [student.pk]

    def test_admin_tombstones_and_restores(self, staff_client, admin_profile, student):
        response = staff_client.delete(f"/api/accounts/students/{student.pk}/")
        assert response.status_code == 200

        student.refresh_from_db()
        assert student.is_deleted is True
        assert student.deleted_by == admin_profile.user
        assert staff_client.get("/api/accounts/students/").json()["pagination"]["total"] == 0

        deleted = staff_client.get("/api/accounts/students/", {"deleted": "only"}).json()
        assert [s["id"] for s in deleted["students"]] == [student.pk]

        assert staff_client.delete(f"/api/accounts/students/{student.pk}/").status_code == 404

        response = staff_client.post(f"/api/accounts/students/{student.pk}/restore/")
        assert response.status_code == 200
        assert response.json()["student"]["is_deleted"] is False

    def test_teacher_cannot_delete(self, teacher_client, student):
        assert teacher_client.delete(f"/api/accounts/students/{student.pk}/").status_code == 403

    def test_anonymous(self, client):
        assert client.get("/api/accounts/students/").status_code == 401


@pytest.mark.django_db
class TestAttendance:

    def test_record_then_update_same_day(self, teacher_client, student):
        data = {"student": student.pk, "date": "2024-03-01", "status": "present"}
        first = post_json(teacher_client, "/api/accounts/attendance/", data)
        second = post_json(teacher_client, "/api/accounts/attendance/", {**data, "status": "sick"})

        assert first.status_code == 201
        assert second.status_code == 200
        assert Attendance.objects.get(student=student).status == "sick"

    def test_invalid_status(self, teacher_client, student):
        data = {"student": student.pk, "date": "2024-03-01", "status": "holiday"}
        response = post_json(teacher_client, "/api/accounts/attendance/", data)
        assert response.status_code == 400
        assert response.json()["message"] == "Status kehadiran tidak valid."

    def test_summary(self, teacher_client, student):
        for day, status in (("2024-03-01", "present"), ("2024-03-02", "late"), ("2024-03-03", "absent")):
            post_json(teacher_client, "/api/accounts/attendance/",
                      {"student": student.pk, "date": day, "status": status})

        body = teacher_client.get(f"/api/accounts/students/{student.pk}/attendance/").json()
        assert body["total_days"] == 3
        assert body["counts"]["present"] == 1
        assert body["attendance_percentage"] == 66.67

        body = teacher_client.get(
            f"/api/accounts/students/{student.pk}/attendance/", {"date_from": "2024-03-03"}
        ).json()
        assert body["total_days"] == 1
        assert body["attendance_percentage"] == 0

    def test_summary_without_records(self, teacher_client, student):
        body = teacher_client.get(f"/api/accounts/students/{student.pk}/attendance/").json()
        assert body["total_days"] == 0
        assert body["attendance_percentage"] == 0

    def test_student_cannot_read_classmate(self, student, halaqa):
        classmate = make_profile("santri_umar", halaqa=halaqa)
        client = Client()
        client.force_login(student.user)
        assert client.get(f"/api/accounts/students/{classmate.pk}/attendance/").status_code == 403
