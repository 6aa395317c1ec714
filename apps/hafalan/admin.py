from django.contrib import admin

from apps.core.admin import SoftDeleteAdmin

from .models import HafalanAchievement, HafalanProgress, HafalanRecord, Surah


@admin.register(Surah)
class SurahAdmin(admin.ModelAdmin):
    list_display = ('number', 'name', 'name_arabic', 'total_ayat', 'juz')
    search_fields = ('name', 'name_arabic')
    list_filter = ('juz',)


@admin.register(HafalanRecord)
class HafalanRecordAdmin(SoftDeleteAdmin):
    list_display = ('student', 'surah', 'start_ayat', 'end_ayat', 'status', 'quality', 'date', 'teacher')
    list_filter = ('status', 'quality', 'date', 'student__halaqa')
    search_fields = ('student__user__username', 'student__nis', 'surah__name')
    autocomplete_fields = ('surah',)


@admin.register(HafalanProgress)
class HafalanProgressAdmin(SoftDeleteAdmin):
    list_display = ('student', 'total_surah', 'total_ayat', 'juz30_progress', 'overall_progress', 'avg_quality')
    readonly_fields = (
        'total_surah', 'total_ayat', 'total_juz', 'juz30_progress', 'overall_progress',
        'avg_quality', 'total_sessions', 'last_setoran_date',
    )


@admin.register(HafalanAchievement)
class HafalanAchievementAdmin(SoftDeleteAdmin):
    list_display = ('student', 'title', 'level', 'points', 'earned_at')
    list_filter = ('level', 'type')
