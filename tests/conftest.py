import json

import pytest
from django.contrib.auth.models import User
from django.test import Client

from apps.accounts.models import Halaqa, Profile
from apps.hafalan.models import Surah


def make_profile(username, role=Profile.ROLE_STUDENT, halaqa=None, **user_fields):
    user = User.objects.create_user(username=username, password="rahasia-123", **user_fields)
    profile = user.profile
    profile.role = role
    profile.halaqa = halaqa
    if role == Profile.ROLE_TEACHER:
        profile.teacher_status = Profile.TEACHER_APPROVED
    profile.save()
    return profile


def post_json(client, url, data, method="post"):
    return getattr(client, method)(url, data=json.dumps(data, default=str), content_type="application/json")


@pytest.fixture
def halaqa(db):
    return Halaqa.objects.create(name="Halaqah Abu Bakar", juz_from=29, juz_to=30)


@pytest.fixture
def teacher(halaqa):
    profile = make_profile("ustadz_ahmad", Profile.ROLE_TEACHER, first_name="Ahmad")
    halaqa.teachers.add(profile)
    return profile


@pytest.fixture
def other_teacher(db):
    return make_profile("ustadz_umar", Profile.ROLE_TEACHER)


@pytest.fixture
def student(halaqa):
    return make_profile("santri_ali", halaqa=halaqa, first_name="Ali")


@pytest.fixture
def admin_profile(db):
    return make_profile("pengurus", Profile.ROLE_ADMIN, is_staff=True)


@pytest.fixture
def surahs(db):
    return {
        number: Surah.objects.create(number=number, name=name, total_ayat=ayat, juz=juz)
        for number, name, ayat, juz in (
            (1, "Al-Fatihah", 7, 1),
            (2, "Al-Baqarah", 286, 1),
            (78, "An-Naba'", 40, 30),
            (112, "Al-Ikhlas", 4, 30),
        )
    }


@pytest.fixture
def teacher_client(teacher):
    client = Client()
    client.force_login(teacher.user)
    return client


@pytest.fixture
def staff_client(admin_profile):
    client = Client()
    client.force_login(admin_profile.user)
    return client
