"""
Hafalan progress recomputation.

``compute_progress`` folds a student's records into the summary fields; it is a
pure function of the records it is given. ``update_student_progress`` loads the
live records, computes and upserts ``HafalanProgress``. Mutation views call it
explicitly after every create, update or soft delete of a record.
"""
import logging
from collections import defaultdict

from django.core.exceptions import ObjectDoesNotExist
from django.utils import timezone

from apps.core.errors import AggregationFailed
from apps.core.softdelete import Repository

from .models import HafalanProgress, HafalanRecord

logger = logging.getLogger(__name__)

TOTAL_QURAN_AYAT = 6236
JUZ_30_AYAT = 564

QUALITY_SCORES = {"A": 4, "B": 3, "C": 2}
DEFAULT_QUALITY_SCORE = 2


def quality_score(quality):
    return QUALITY_SCORES.get(quality, DEFAULT_QUALITY_SCORE)


def _percentage(part, whole):
    if not whole:
        return 0
    return round(min(part / whole * 100, 100), 2)


def mastered_surahs(records):
    """
    Surah numbers whose MUTQIN ranges, unioned, cover every ayat of the surah.
    """
    covered = defaultdict(set)
    totals = {}
    for record in records:
        if record.status != HafalanRecord.STATUS_MUTQIN:
            continue
        surah = record.surah
        covered[surah.number].update(range(record.start_ayat, record.end_ayat + 1))
        totals[surah.number] = surah.total_ayat
    return sorted(number for number, ayat in covered.items() if len(ayat) == totals[number])


def compute_progress(records):
    """
    Summary fields for ``records`` (the student's live records, any status).

    ``total_ayat`` is the raw sum of range lengths: re-recited or overlapping
    ranges are counted again. Surah mastery uses the deduplicated union.
    """
    records = list(records)

    total_ayat = 0
    quality_sum = 0
    juz_ayat = defaultdict(int)
    for record in records:
        length = record.end_ayat - record.start_ayat + 1
        total_ayat += length
        quality_sum += quality_score(record.quality)
        juz_ayat[record.surah.juz] += length

    avg_quality = round(quality_sum / len(records), 2) if records else 0

    return {
        "total_surah": len(mastered_surahs(records)),
        "total_ayat": total_ayat,
        "total_juz": len(juz_ayat),
        "juz30_progress": _percentage(juz_ayat.get(30, 0), JUZ_30_AYAT),
        "overall_progress": _percentage(total_ayat, TOTAL_QURAN_AYAT),
        "avg_quality": avg_quality,
        "total_sessions": len(records),
    }


def live_records(student):
    return (Repository(HafalanRecord)
            .find_many({"student": student})
            .select_related("surah")
            .order_by("date", "id"))


def update_student_progress(student):
    """Recompute and upsert the student's HafalanProgress; returns the row."""
    try:
        fields = compute_progress(live_records(student))
    except ObjectDoesNotExist as e:
        logger.exception("Progress recomputation failed for student=%s", student.pk)
        raise AggregationFailed(f"Data surah untuk hafalan santri tidak lengkap: {e}") from e

    fields["last_setoran_date"] = timezone.now()
    # the summary has no lifecycle of its own: a recomputed row is always live
    fields.update(is_deleted=False, deleted_at=None, deleted_by=None)
    progress = Repository(HafalanProgress).upsert({"student": student}, fields)
    logger.info(
        "Recomputed hafalan progress student=%s ayat=%s overall=%s%%",
        student.pk, fields["total_ayat"], fields["overall_progress"],
    )
    return progress
