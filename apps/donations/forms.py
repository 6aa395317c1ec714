from decimal import Decimal

from django import forms

from .models import Donation

MIN_AMOUNT = Decimal("1000")
MIN_AMOUNT_MESSAGE = "Jumlah donasi minimal Rp 1.000"


class DonationForm(forms.Form):
    amount = forms.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=MIN_AMOUNT,
        error_messages={
            "required": MIN_AMOUNT_MESSAGE,
            "min_value": MIN_AMOUNT_MESSAGE,
            "invalid": "Jumlah donasi harus berupa angka.",
        },
    )
    payment_method = forms.ChoiceField(
        choices=Donation.METHOD_CHOICES,
        error_messages={
            "required": "Metode pembayaran harus dipilih",
            "invalid_choice": "Metode pembayaran tidak valid",
        },
    )
    payment_channel = forms.CharField(max_length=50, required=False)
    is_anonymous = forms.BooleanField(required=False)
    donor_name = forms.CharField(max_length=150, required=False)
    donor_email = forms.EmailField(required=False, error_messages={"invalid": "Format email tidak valid"})
    donor_phone = forms.CharField(max_length=30, required=False)
    message = forms.CharField(required=False)

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("is_anonymous") and not self.has_error("donor_email"):
            if not cleaned.get("donor_name") or not cleaned.get("donor_email"):
                raise forms.ValidationError("Nama dan email donatur harus diisi jika tidak anonim")
        return cleaned
