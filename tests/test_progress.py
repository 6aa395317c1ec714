"""
Progress aggregation over in-memory records (no database).
"""
import pytest

from apps.hafalan.achievements import achievement_level
from apps.hafalan.models import HafalanAchievement, HafalanRecord, Surah
from apps.hafalan.progress import compute_progress, mastered_surahs, quality_score

MUTQIN = HafalanRecord.STATUS_MUTQIN
LANCAR = HafalanRecord.STATUS_LANCAR

FATIHAH = Surah(number=1, name="Al-Fatihah", total_ayat=7, juz=1)
NABA = Surah(number=78, name="An-Naba'", total_ayat=40, juz=30)


def record(surah, start, end, status=MUTQIN, quality="B"):
    return HafalanRecord(surah=surah, start_ayat=start, end_ayat=end, status=status, quality=quality)


class TestQualityScore:

    @pytest.mark.parametrize("quality,score", [("A", 4), ("B", 3), ("C", 2), ("D", 2), ("", 2)])
    def test_scores(self, quality, score):
        assert quality_score(quality) == score


class TestMasteredSurahs:

    def test_split_ranges_complete_surah(self):
        assert mastered_surahs([record(FATIHAH, 1, 4), record(FATIHAH, 5, 7)]) == [1]

    def test_partial_coverage(self):
        assert mastered_surahs([record(FATIHAH, 1, 4)]) == []

    def test_only_mutqin_counts(self):
        assert mastered_surahs([record(FATIHAH, 1, 7, status=LANCAR)]) == []
        assert mastered_surahs([record(FATIHAH, 1, 4), record(FATIHAH, 5, 7, status=LANCAR)]) == []

    def test_overlap_is_deduplicated(self):
        records = [record(FATIHAH, 1, 5), record(FATIHAH, 3, 7), record(NABA, 1, 40)]
        assert mastered_surahs(records) == [1, 78]


class TestComputeProgress:

    def test_no_records(self):
        assert compute_progress([]) == {
            "total_surah": 0,
            "total_ayat": 0,
            "total_juz": 0,
            "juz30_progress": 0,
            "overall_progress": 0,
            "avg_quality": 0,
            "total_sessions": 0,
        }

    def test_completed_surah(self):
        progress = compute_progress([record(FATIHAH, 1, 4), record(FATIHAH, 5, 7)])
        assert progress["total_surah"] == 1
        assert progress["total_ayat"] == 7
        assert progress["total_juz"] == 1
        assert progress["total_sessions"] == 2
        assert progress["overall_progress"] == round(7 / 6236 * 100, 2)
        assert progress["juz30_progress"] == 0

    def test_average_quality(self):
        records = [
            record(FATIHAH, 1, 1, quality="A"),
            record(FATIHAH, 2, 2, quality="B"),
            record(FATIHAH, 3, 3, quality="C"),
        ]
        assert compute_progress(records)["avg_quality"] == 3.0

    def test_total_ayat_counts_repetitions(self):
        records = [record(FATIHAH, 1, 7, status=LANCAR), record(FATIHAH, 1, 7)]
        progress = compute_progress(records)
        assert progress["total_ayat"] == 14
        assert progress["total_surah"] == 1

    def test_juz30_progress(self):
        progress = compute_progress([record(NABA, 1, 40)])
        assert progress["juz30_progress"] == round(40 / 564 * 100, 2)
        assert progress["total_juz"] == 1

    def test_percentages_capped(self):
        big = Surah(number=78, name="An-Naba'", total_ayat=600, juz=30)
        records = [record(big, 1, 600)] * 12
        progress = compute_progress(records)
        assert progress["juz30_progress"] == 100
        assert progress["overall_progress"] == 100

    def test_pure(self):
        records = [record(FATIHAH, 1, 4), record(NABA, 1, 10, status=LANCAR, quality="A")]
        assert compute_progress(records) == compute_progress(records)
        assert len(records) == 2


class TestAchievementLevel:

    @pytest.mark.parametrize("ayat,level", [
        (286, HafalanAchievement.LEVEL_GOLD),
        (101, HafalanAchievement.LEVEL_GOLD),
        (100, HafalanAchievement.LEVEL_SILVER),
        (51, HafalanAchievement.LEVEL_SILVER),
        (50, HafalanAchievement.LEVEL_BRONZE),
        (7, HafalanAchievement.LEVEL_BRONZE),
    ])
    def test_levels(self, ayat, level):
        assert achievement_level(ayat) == level
