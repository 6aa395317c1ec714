from apps.core.errors import Forbidden, NotFound
from apps.core.softdelete import Repository, is_active

from .models import Profile


def profile_for(user):
    """The live profile of ``user`` or None (anonymous, missing or tombstoned)."""
    profile = getattr(user, "profile", None) if user.is_authenticated else None
    return profile if is_active(profile) else None


def is_admin(user):
    if not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = profile_for(user)
    return profile is not None and profile.role == Profile.ROLE_ADMIN


def is_teacher(user):
    profile = profile_for(user)
    return profile is not None and profile.role == Profile.ROLE_TEACHER


def require_admin(user):
    if not is_admin(user):
        raise Forbidden("Hanya admin yang dapat melakukan tindakan ini.")


def require_staff_member(user):
    """Teachers and admins may record hafalan and attendance."""
    if not (is_admin(user) or is_teacher(user)):
        raise Forbidden("Hanya ustadz atau admin yang dapat melakukan tindakan ini.")
    return profile_for(user)


def teaches(teacher, student):
    return (
        teacher is not None
        and student.halaqa_id is not None
        and student.halaqa.teachers.filter(pk=teacher.pk).exists()
    )


def visible_students_where(user):
    """Predicate for the students ``user`` may look at."""
    where = {"role": Profile.ROLE_STUDENT}
    if is_admin(user):
        return where
    profile = require_staff_member(user)
    where["halaqa__teachers"] = profile
    return where


def get_visible_student(user, student_id):
    """
    A live student profile ``user`` may read: admins see everyone, teachers
    their halaqat, students only themselves.
    """
    repo = Repository(Profile)
    own = profile_for(user)
    if not is_admin(user) and own is not None and own.role == Profile.ROLE_STUDENT:
        if own.pk != int(student_id):
            raise Forbidden("Anda hanya dapat melihat data Anda sendiri.")
        return own
    where = visible_students_where(user)
    where["pk"] = student_id
    student = repo.find_first(where)
    if student is None:
        raise NotFound("Santri tidak ditemukan.")
    return student
