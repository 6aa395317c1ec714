import pytest
from django.core.management import call_command
from django.test import Client
from django.utils import timezone

from apps.accounts.models import Halaqa, Profile
from apps.core.softdelete import Repository
from apps.hafalan.models import HafalanAchievement, HafalanProgress, HafalanRecord, Surah

from conftest import make_profile, post_json

RECORDS_URL = "/api/hafalan/records/"


def record_url(record_id, action=""):
    return f"{RECORDS_URL}{record_id}/{action}"


def payload(student, surah=1, start=1, end=7, status="LANCAR", **extra):
    return {"student": student.pk, "surah": surah, "start_ayat": start, "end_ayat": end, "status": status, **extra}


@pytest.mark.django_db
class TestLoadSurahs:

    def test_loads_whole_quran(self):
        call_command("load_surahs")
        call_command("load_surahs")

        assert Surah.objects.count() == 114
        assert sum(Surah.objects.values_list("total_ayat", flat=True)) == 6236
        assert sum(Surah.objects.filter(juz=30).values_list("total_ayat", flat=True)) == 564
        assert Surah.objects.get(number=2).total_ayat == 286


@pytest.mark.django_db
class TestCreateRecord:

    def test_create_updates_progress(self, teacher_client, teacher, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, quality="A"))

        assert response.status_code == 201
        body = response.json()
        assert body["record"]["teacher"]["id"] == teacher.pk
        assert body["progress"]["total_ayat"] == 7
        assert body["progress"]["total_sessions"] == 1
        assert body["achievement"] is None
        assert HafalanProgress.objects.get(student=student).avg_quality == 4

    def test_default_quality(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student))
        assert HafalanRecord.objects.get(pk=response.json()["record"]["id"]).quality == "B"

    def test_start_after_end(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, start=5, end=3))

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["message"] == "Ayat awal tidak boleh lebih besar dari ayat akhir."
        assert not HafalanRecord.objects.exists()

    def test_end_beyond_surah(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, end=8))

        assert response.status_code == 400
        assert response.json()["message"] == "Surah Al-Fatihah hanya memiliki 7 ayat."

    def test_missing_fields(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, {"student": student.pk, "surah": 1})

        assert response.status_code == 400
        assert "start_ayat" in response.json()["errors"]

    def test_null_defaults_fall_back(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, date=None, quality="", method=None))

        assert response.status_code == 201
        record = HafalanRecord.objects.get(pk=response.json()["record"]["id"])
        assert record.date == timezone.localdate()
        assert record.quality == "B"
        assert record.method == HafalanRecord.METHOD_INDIVIDUAL

    def test_invalid_date(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, date="kemarin"))
        assert response.status_code == 400
        assert "date" in response.json()["errors"]

    def test_unknown_surah(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student, surah=200))
        assert response.status_code == 404

    def test_anonymous(self, client, student, surahs):
        response = post_json(client, RECORDS_URL, payload(student))
        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_student_cannot_record(self, client, student, surahs):
        client.force_login(student.user)
        response = post_json(client, RECORDS_URL, payload(student))
        assert response.status_code == 403

    def test_teacher_outside_halaqa(self, other_teacher, student, surahs):
        client = Client()
        client.force_login(other_teacher.user)
        response = post_json(client, RECORDS_URL, payload(student))
        assert response.status_code == 403


@pytest.mark.django_db
class TestAchievements:

    def test_surah_completion_awarded_once(self, teacher_client, student, surahs):
        first = post_json(teacher_client, RECORDS_URL, payload(student, start=1, end=4, status="MUTQIN"))
        assert first.json()["achievement"] is None

        second = post_json(teacher_client, RECORDS_URL, payload(student, start=5, end=7, status="MUTQIN"))
        achievement = second.json()["achievement"]
        assert achievement["level"] == "BRONZE"
        assert achievement["points"] == 70
        assert second.json()["progress"]["total_surah"] == 1

        post_json(teacher_client, RECORDS_URL, payload(student, start=1, end=7, status="MUTQIN"))
        assert HafalanAchievement.objects.filter(student=student).count() == 1

    def test_update_to_mutqin_awards(self, teacher_client, student, surahs):
        created = post_json(teacher_client, RECORDS_URL, payload(student, surah=112, end=4))
        record_id = created.json()["record"]["id"]

        response = post_json(teacher_client, record_url(record_id), {"status": "MUTQIN"}, method="put")

        assert response.status_code == 200
        assert response.json()["record"]["status"] == "MUTQIN"
        assert response.json()["record"]["end_ayat"] == 4
        assert response.json()["achievement"]["title"] == "Menyelesaikan Surah Al-Ikhlas"


@pytest.mark.django_db
class TestRecordMutations:

    @pytest.fixture
    def record(self, teacher_client, student, surahs):
        response = post_json(teacher_client, RECORDS_URL, payload(student))
        return HafalanRecord.objects.get(pk=response.json()["record"]["id"])

    def test_other_teacher_forbidden(self, record, other_teacher):
        client = Client()
        client.force_login(other_teacher.user)

        assert client.delete(record_url(record.pk)).status_code == 403
        assert post_json(client, record_url(record.pk), {"quality": "A"}, method="put").status_code == 403

    def test_update_validates_range(self, teacher_client, record):
        response = post_json(teacher_client, record_url(record.pk), {"start_ayat": 6, "end_ayat": 2}, method="patch")
        assert response.status_code == 400

    def test_update_with_empty_values(self, teacher_client, record):
        record.quality = "A"
        record.save()

        response = post_json(teacher_client, record_url(record.pk), {"date": None, "quality": ""}, method="patch")

        assert response.status_code == 200
        record.refresh_from_db()
        assert record.quality == "B"
        assert record.date == timezone.localdate()

    def test_delete_tombstones_and_recomputes(self, teacher_client, teacher, student, record):
        response = teacher_client.delete(record_url(record.pk))

        assert response.status_code == 200
        record.refresh_from_db()
        assert record.is_deleted is True
        assert record.deleted_at is not None
        assert record.deleted_by == teacher.user

        progress = HafalanProgress.objects.get(student=student)
        assert progress.total_ayat == 0
        assert progress.total_sessions == 0

        assert teacher_client.get(record_url(record.pk)).status_code == 404
        assert teacher_client.delete(record_url(record.pk)).status_code == 404

    def test_list_hides_tombstones(self, teacher_client, staff_client, record):
        teacher_client.delete(record_url(record.pk))

        assert teacher_client.get(RECORDS_URL).json()["pagination"]["total"] == 0
        assert teacher_client.get(RECORDS_URL, {"deleted": "only"}).status_code == 403

        deleted = staff_client.get(RECORDS_URL, {"deleted": "only"}).json()
        assert [r["id"] for r in deleted["records"]] == [record.pk]
        assert staff_client.get(RECORDS_URL, {"deleted": "all"}).json()["pagination"]["total"] == 1

    def test_admin_restore(self, teacher_client, staff_client, student, record):
        teacher_client.delete(record_url(record.pk))
        response = staff_client.post(record_url(record.pk, "restore/"))

        assert response.status_code == 200
        assert response.json()["progress"]["total_ayat"] == 7
        record.refresh_from_db()
        assert record.is_deleted is False

    def test_restore_live_record(self, staff_client, record):
        assert staff_client.post(record_url(record.pk, "restore/")).status_code == 404

    def test_teacher_cannot_restore(self, teacher_client, record):
        teacher_client.delete(record_url(record.pk))
        assert teacher_client.post(record_url(record.pk, "restore/")).status_code == 403

    def test_list_filters(self, teacher_client, student, surahs, record):
        post_json(teacher_client, RECORDS_URL, payload(student, surah=78, start=1, end=10))

        assert teacher_client.get(RECORDS_URL, {"surah": 78}).json()["pagination"]["total"] == 1
        assert teacher_client.get(RECORDS_URL, {"student": student.pk}).json()["pagination"]["total"] == 2
        assert teacher_client.get(RECORDS_URL, {"status": "MUTQIN"}).json()["pagination"]["total"] == 0
        assert teacher_client.get(RECORDS_URL, {"date_from": "not-a-date"}).status_code == 400


@pytest.mark.django_db
class TestStudentProgress:

    def test_without_records(self, teacher_client, student, surahs):
        response = teacher_client.get(f"/api/hafalan/students/{student.pk}/progress/")

        assert response.status_code == 200
        body = response.json()
        assert body["progress"]["total_ayat"] == 0
        assert body["progress"]["overall_progress"] == 0
        assert {s["status"] for s in body["surahs"]} == {"BELUM_DIHAFAL"}

    def test_surah_statuses(self, teacher_client, student, surahs):
        post_json(teacher_client, RECORDS_URL, payload(student, surah=1, status="MUTQIN"))
        post_json(teacher_client, RECORDS_URL, payload(student, surah=78, start=1, end=20, status="SEDANG_DIHAFAL"))

        body = teacher_client.get(
            f"/api/hafalan/students/{student.pk}/progress/", {"include_recent": "1"}
        ).json()
        statuses = {s["number"]: s for s in body["surahs"]}
        assert statuses[1]["status"] == "MUTQIN"
        assert statuses[1]["percentage"] == 100
        assert statuses[78]["status"] == "SEDANG_DIHAFAL"
        assert statuses[78]["percentage"] == 50
        assert statuses[2]["status"] == "BELUM_DIHAFAL"
        assert len(body["recent_records"]) == 2
        assert len(body["achievements"]) == 1

        juz = {j["juz"]: j for j in body["juz"]}
        assert juz[30]["memorized_ayat"] == 20

    def test_tombstoned_summary_is_revived(self, teacher_client, student, surahs):
        post_json(teacher_client, RECORDS_URL, payload(student, surah=112, end=4))
        Repository(HafalanProgress).delete({"student": student})

        post_json(teacher_client, RECORDS_URL, payload(student))

        progress = HafalanProgress.objects.get(student=student)
        assert progress.is_deleted is False
        assert progress.deleted_at is None
        body = teacher_client.get(f"/api/hafalan/students/{student.pk}/progress/").json()
        assert body["progress"]["total_ayat"] == 11
        assert body["progress"]["total_sessions"] == 2

    def test_student_sees_only_self(self, student, halaqa, surahs):
        classmate = make_profile("santri_umar", halaqa=halaqa)
        client = Client()
        client.force_login(student.user)

        assert client.get(f"/api/hafalan/students/{student.pk}/progress/").status_code == 200
        assert client.get(f"/api/hafalan/students/{classmate.pk}/progress/").status_code == 403


@pytest.mark.django_db
class TestStatistics:

    def test_statistics(self, teacher_client, student, surahs):
        post_json(teacher_client, RECORDS_URL, payload(student, quality="A", status="MUTQIN"))
        post_json(teacher_client, RECORDS_URL, payload(student, surah=78, start=1, end=10, quality="C"))

        response = teacher_client.get("/api/hafalan/statistics/", {"period": "week"})

        assert response.status_code == 200
        body = response.json()
        assert body["total_records"] == 2
        assert body["active_students"] == 1
        assert body["quality_distribution"] == {"A": 1, "B": 0, "C": 1, "D": 0}
        assert body["status_distribution"]["MUTQIN"] == 1
        assert body["top_performers"][0]["student_id"] == student.pk
        assert {s["number"] for s in body["most_memorized_surahs"]} == {1, 78}

    def test_teacher_sees_own_halaqa_only(self, teacher_client, staff_client, student, surahs):
        other_halaqa = Halaqa.objects.create(name="Halaqah Umar")
        other_teacher = make_profile("ustadz_khalid", Profile.ROLE_TEACHER)
        other_halaqa.teachers.add(other_teacher)
        other_student = make_profile("santri_zaid", halaqa=other_halaqa)
        other_client = Client()
        other_client.force_login(other_teacher.user)

        post_json(teacher_client, RECORDS_URL, payload(student))
        post_json(other_client, RECORDS_URL, payload(other_student, surah=78, start=1, end=10))

        body = teacher_client.get("/api/hafalan/statistics/").json()
        assert body["total_records"] == 1
        assert body["active_students"] == 1
        assert [p["student_id"] for p in body["top_performers"]] == [student.pk]
        assert [s["number"] for s in body["most_memorized_surahs"]] == [1]

        assert staff_client.get("/api/hafalan/statistics/").json()["total_records"] == 2

    def test_invalid_period(self, teacher_client):
        assert teacher_client.get("/api/hafalan/statistics/", {"period": "decade"}).status_code == 400

    def test_students_forbidden(self, client, student):
        client.force_login(student.user)
        assert client.get("/api/hafalan/statistics/").status_code == 403
