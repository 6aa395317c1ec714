from django.core.management.base import BaseCommand
from apps.accounts.models import Halaqa

# name, juz_from, juz_to
DEFAULTS = [
    ("Halaqah Abu Bakar Ash-Shiddiq", 1, 3),
    ("Halaqah Umar bin Khattab", 4, 6),
    ("Halaqah Utsman bin Affan", 7, 9),
    ("Halaqah Ali bin Abi Thalib", 10, 12),
    ("Halaqah Khadijah binti Khuwailid", 13, 15),
    ("Halaqah Aisyah Ummul Mukminin", 16, 18),
    ("Halaqah Fatimah Az-Zahra", 19, 21),
    ("Halaqah Khalid bin Walid", 22, 24),
    ("Halaqah Saad bin Abi Waqqash", 25, 27),
    ("Halaqah Abdurrahman bin Auf", 28, 30),
]

class Command(BaseCommand):
    help = "Seed the default halaqat with their juz ranges"

    def handle(self, *args, **options):
        created = 0
        updated = 0
        for name, jf, jt in DEFAULTS:
            obj, was_created = Halaqa.objects.get_or_create(
                name=name,
                defaults={"juz_from": jf, "juz_to": jt},
            )
            if was_created:
                created += 1
            elif obj.juz_from != jf or obj.juz_to != jt:
                obj.juz_from, obj.juz_to = jf, jt
                obj.save(update_fields=["juz_from", "juz_to"])
                updated += 1
        self.stdout.write(self.style.SUCCESS(f"Done. Created {created}, Updated {updated}."))
