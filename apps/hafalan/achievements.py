import logging

from apps.core.softdelete import Repository

from .models import HafalanAchievement, HafalanRecord
from .progress import mastered_surahs

logger = logging.getLogger(__name__)


def achievement_level(total_ayat):
    if total_ayat > 100:
        return HafalanAchievement.LEVEL_GOLD
    if total_ayat > 50:
        return HafalanAchievement.LEVEL_SILVER
    return HafalanAchievement.LEVEL_BRONZE


def award_surah_completion(student, surah, verified_by=None):
    """
    Award SURAH_COMPLETE once the student's MUTQIN records cover the whole
    surah. Returns the new achievement, or None if not (yet) earned or already
    awarded.
    """
    records = (Repository(HafalanRecord)
               .find_many({"student": student, "surah": surah, "status": HafalanRecord.STATUS_MUTQIN})
               .select_related("surah"))
    if surah.number not in mastered_surahs(records):
        return None

    repo = Repository(HafalanAchievement)
    already = repo.exists({
        "student": student,
        "surah": surah,
        "type": HafalanAchievement.TYPE_SURAH_COMPLETE,
    })
    if already:
        return None

    achievement = repo.create(
        student=student,
        surah=surah,
        type=HafalanAchievement.TYPE_SURAH_COMPLETE,
        title=f"Menyelesaikan Surah {surah.name}",
        description=(
            f"Berhasil menghafal dan menguasai seluruh ayat dalam Surah {surah.name} "
            f"({surah.total_ayat} ayat)"
        ),
        level=achievement_level(surah.total_ayat),
        points=surah.total_ayat * 10,
        verified_by=verified_by,
    )
    logger.info("Awarded %s to student=%s for surah=%s", achievement.type, student.pk, surah.number)
    return achievement
