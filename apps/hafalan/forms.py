from django import forms
from django.utils import timezone

from apps.accounts.models import Profile

from .models import HafalanRecord, Surah


class HafalanRecordForm(forms.ModelForm):
    """Create/update payload of a setoran. ``surah`` is the surah number."""
    surah = forms.ModelChoiceField(
        queryset=Surah.objects.all(),
        to_field_name="number",
        error_messages={"required": "Surah wajib diisi.", "invalid_choice": "Surah tidak ditemukan."},
    )

    class Meta:
        model = HafalanRecord
        fields = [
            "student", "surah", "date", "start_ayat", "end_ayat", "status", "quality",
            "fluency", "tajweed", "duration", "method", "notes",
        ]
        error_messages = {
            "student": {"required": "Santri wajib dipilih.", "invalid_choice": "Santri tidak ditemukan."},
            "start_ayat": {"required": "Ayat awal wajib diisi."},
            "end_ayat": {"required": "Ayat akhir wajib diisi."},
            "status": {"required": "Status hafalan wajib diisi.", "invalid_choice": "Status hafalan tidak valid."},
            "quality": {"invalid_choice": "Nilai kualitas harus A, B, C, atau D."},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["student"].queryset = Profile.objects.filter(
            role=Profile.ROLE_STUDENT, is_deleted=False
        )
        # model defaults apply when these are left out
        for name in ("date", "quality", "method"):
            self.fields[name].required = False

    def clean(self):
        cleaned = super().clean()
        # an explicit null or "" falls back to the model default, like an omitted key
        defaults = {
            "date": timezone.localdate(),
            "quality": "B",
            "method": HafalanRecord.METHOD_INDIVIDUAL,
        }
        for name, default in defaults.items():
            if not cleaned.get(name) and name not in self.errors:
                cleaned[name] = default
        s = cleaned.get("start_ayat")
        e = cleaned.get("end_ayat")
        surah = cleaned.get("surah")
        if s is not None and s < 1:
            self.add_error("start_ayat", "Ayat awal minimal 1.")
        if s and e and s > e:
            raise forms.ValidationError("Ayat awal tidak boleh lebih besar dari ayat akhir.")
        if surah and e and e > surah.total_ayat:
            raise forms.ValidationError(f"Surah {surah.name} hanya memiliki {surah.total_ayat} ayat.")
        return cleaned


def record_form_data(record):
    """Current values of ``record`` in form-data shape, for partial updates."""
    return {
        "student": record.student_id,
        "surah": record.surah.number,
        "date": record.date,
        "start_ayat": record.start_ayat,
        "end_ayat": record.end_ayat,
        "status": record.status,
        "quality": record.quality,
        "fluency": record.fluency,
        "tajweed": record.tajweed,
        "duration": record.duration,
        "method": record.method,
        "notes": record.notes,
    }
