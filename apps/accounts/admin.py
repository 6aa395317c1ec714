from django.contrib import admin

from apps.core.admin import SoftDeleteAdmin

from .models import Attendance, Halaqa, Profile


# ========== Profile ==========
@admin.register(Profile)
class ProfileAdmin(SoftDeleteAdmin):
    list_display  = ("user", "nis", "role", "halaqa_name", "teacher_status_display", "is_deleted")
    list_filter   = ("role", "teacher_status", "halaqa")
    search_fields = ("user__username", "user__first_name", "user__last_name", "nis")

    @admin.display(description="Halaqah")
    def halaqa_name(self, obj):
        return obj.halaqa.name if obj.halaqa else "-"

    @admin.display(description="Status ustadz")
    def teacher_status_display(self, obj):
        return obj.teacher_status.title() if obj.role == Profile.ROLE_TEACHER else "-"


# ========== Halaqa ==========
@admin.register(Halaqa)
class HalaqaAdmin(SoftDeleteAdmin):
    list_display  = ("name", "juz_from", "juz_to", "is_deleted")
    search_fields = ("name",)
    filter_horizontal = ("teachers",)


# ========== Attendance ==========
@admin.register(Attendance)
class AttendanceAdmin(SoftDeleteAdmin):
    list_display = ("student", "date", "status", "is_deleted")
    list_filter = ("date", "status", "student__halaqa")
    search_fields = ("student__user__username", "student__nis")
