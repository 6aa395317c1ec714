from django import forms

from .models import Attendance, Profile


class AttendanceForm(forms.Form):
    student = forms.ModelChoiceField(
        queryset=Profile.objects.filter(role=Profile.ROLE_STUDENT, is_deleted=False),
        error_messages={
            "required": "Santri wajib dipilih.",
            "invalid_choice": "Santri tidak ditemukan.",
        },
    )
    date = forms.DateField(error_messages={"required": "Tanggal wajib diisi.", "invalid": "Format tanggal tidak valid."})
    status = forms.ChoiceField(
        choices=Attendance.STATUS_CHOICES,
        error_messages={"required": "Status kehadiran wajib diisi.", "invalid_choice": "Status kehadiran tidak valid."},
    )
    notes = forms.CharField(max_length=255, required=False)
