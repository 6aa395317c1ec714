from django.core.management.base import BaseCommand
from django.db import transaction

from apps.hafalan.models import Surah

# number, name, Arabic name, ayat, juz where the surah starts
SURAH_DATA = [
    (1, "Al-Fatihah", "الفاتحة", 7, 1),
    (2, "Al-Baqarah", "البقرة", 286, 1),
    (3, "Ali 'Imran", "آل عمران", 200, 3),
    (4, "An-Nisa'", "النساء", 176, 4),
    (5, "Al-Ma'idah", "المائدة", 120, 6),
    (6, "Al-An'am", "الأنعام", 165, 7),
    (7, "Al-A'raf", "الأعراف", 206, 8),
    (8, "Al-Anfal", "الأنفال", 75, 9),
    (9, "At-Taubah", "التوبة", 129, 10),
    (10, "Yunus", "يونس", 109, 11),
    (11, "Hud", "هود", 123, 11),
    (12, "Yusuf", "يوسف", 111, 12),
    (13, "Ar-Ra'd", "الرعد", 43, 13),
    (14, "Ibrahim", "إبراهيم", 52, 13),
    (15, "Al-Hijr", "الحجر", 99, 14),
    (16, "An-Nahl", "النحل", 128, 14),
    (17, "Al-Isra'", "الإسراء", 111, 15),
    (18, "Al-Kahf", "الكهف", 110, 15),
    (19, "Maryam", "مريم", 98, 16),
    (20, "Taha", "طه", 135, 16),
    (21, "Al-Anbiya'", "الأنبياء", 112, 17),
    (22, "Al-Hajj", "الحج", 78, 17),
    (23, "Al-Mu'minun", "المؤمنون", 118, 18),
    (24, "An-Nur", "النور", 64, 18),
    (25, "Al-Furqan", "الفرقان", 77, 18),
    (26, "Asy-Syu'ara'", "الشعراء", 227, 19),
    (27, "An-Naml", "النمل", 93, 19),
    (28, "Al-Qasas", "القصص", 88, 20),
    (29, "Al-'Ankabut", "العنكبوت", 69, 20),
    (30, "Ar-Rum", "الروم", 60, 21),
    (31, "Luqman", "لقمان", 34, 21),
    (32, "As-Sajdah", "السجدة", 30, 21),
    (33, "Al-Ahzab", "الأحزاب", 73, 21),
    (34, "Saba'", "سبأ", 54, 22),
    (35, "Fatir", "فاطر", 45, 22),
    (36, "Yasin", "يس", 83, 22),
    (37, "As-Saffat", "الصافات", 182, 23),
    (38, "Sad", "ص", 88, 23),
    (39, "Az-Zumar", "الزمر", 75, 23),
    (40, "Gafir", "غافر", 85, 24),
    (41, "Fussilat", "فصلت", 54, 24),
    (42, "Asy-Syura", "الشورى", 53, 25),
    (43, "Az-Zukhruf", "الزخرف", 89, 25),
    (44, "Ad-Dukhan", "الدخان", 59, 25),
    (45, "Al-Jasiyah", "الجاثية", 37, 25),
    (46, "Al-Ahqaf", "الأحقاف", 35, 26),
    (47, "Muhammad", "محمد", 38, 26),
    (48, "Al-Fath", "الفتح", 29, 26),
    (49, "Al-Hujurat", "الحجرات", 18, 26),
    (50, "Qaf", "ق", 45, 26),
    (51, "Az-Zariyat", "الذاريات", 60, 26),
    (52, "At-Tur", "الطور", 49, 27),
    (53, "An-Najm", "النجم", 62, 27),
    (54, "Al-Qamar", "القمر", 55, 27),
    (55, "Ar-Rahman", "الرحمن", 78, 27),
    (56, "Al-Waqi'ah", "الواقعة", 96, 27),
    (57, "Al-Hadid", "الحديد", 29, 27),
    (58, "Al-Mujadilah", "المجادلة", 22, 28),
    (59, "Al-Hasyr", "الحشر", 24, 28),
    (60, "Al-Mumtahanah", "الممتحنة", 13, 28),
    (61, "As-Saff", "الصف", 14, 28),
    (62, "Al-Jumu'ah", "الجمعة", 11, 28),
    (63, "Al-Munafiqun", "المنافقون", 11, 28),
    (64, "At-Tagabun", "التغابن", 18, 28),
    (65, "At-Talaq", "الطلاق", 12, 28),
    (66, "At-Tahrim", "التحريم", 12, 28),
    (67, "Al-Mulk", "الملك", 30, 29),
    (68, "Al-Qalam", "القلم", 52, 29),
    (69, "Al-Haqqah", "الحاقة", 52, 29),
    (70, "Al-Ma'arij", "المعارج", 44, 29),
    (71, "Nuh", "نوح", 28, 29),
    (72, "Al-Jinn", "الجن", 28, 29),
    (73, "Al-Muzzammil", "المزمل", 20, 29),
    (74, "Al-Muddassir", "المدثر", 56, 29),
    (75, "Al-Qiyamah", "القيامة", 40, 29),
    (76, "Al-Insan", "الإنسان", 31, 29),
    (77, "Al-Mursalat", "المرسلات", 50, 29),
    (78, "An-Naba'", "النبأ", 40, 30),
    (79, "An-Nazi'at", "النازعات", 46, 30),
    (80, "'Abasa", "عبس", 42, 30),
    (81, "At-Takwir", "التكوير", 29, 30),
    (82, "Al-Infitar", "الانفطار", 19, 30),
    (83, "Al-Mutaffifin", "المطففين", 36, 30),
    (84, "Al-Insyiqaq", "الانشقاق", 25, 30),
    (85, "Al-Buruj", "البروج", 22, 30),
    (86, "At-Tariq", "الطارق", 17, 30),
    (87, "Al-A'la", "الأعلى", 19, 30),
    (88, "Al-Gasyiyah", "الغاشية", 26, 30),
    (89, "Al-Fajr", "الفجر", 30, 30),
    (90, "Al-Balad", "البلد", 20, 30),
    (91, "Asy-Syams", "الشمس", 15, 30),
    (92, "Al-Lail", "الليل", 21, 30),
    (93, "Ad-Duha", "الضحى", 11, 30),
    (94, "Asy-Syarh", "الشرح", 8, 30),
    (95, "At-Tin", "التين", 8, 30),
    (96, "Al-'Alaq", "العلق", 19, 30),
    (97, "Al-Qadr", "القدر", 5, 30),
    (98, "Al-Bayyinah", "البينة", 8, 30),
    (99, "Az-Zalzalah", "الزلزلة", 8, 30),
    (100, "Al-'Adiyat", "العاديات", 11, 30),
    (101, "Al-Qari'ah", "القارعة", 11, 30),
    (102, "At-Takasur", "التكاثر", 8, 30),
    (103, "Al-'Asr", "العصر", 3, 30),
    (104, "Al-Humazah", "الهمزة", 9, 30),
    (105, "Al-Fil", "الفيل", 5, 30),
    (106, "Quraisy", "قريش", 4, 30),
    (107, "Al-Ma'un", "الماعون", 7, 30),
    (108, "Al-Kausar", "الكوثر", 3, 30),
    (109, "Al-Kafirun", "الكافرون", 6, 30),
    (110, "An-Nasr", "النصر", 3, 30),
    (111, "Al-Lahab", "المسد", 5, 30),
    (112, "Al-Ikhlas", "الإخلاص", 4, 30),
    (113, "Al-Falaq", "الفلق", 5, 30),
    (114, "An-Nas", "الناس", 6, 30),
]


class Command(BaseCommand):
    help = "Load or update the 114 surahs (ayat count and juz)."

    @transaction.atomic
    def handle(self, *args, **kwargs):
        created = 0
        for number, name, name_arabic, total_ayat, juz in SURAH_DATA:
            _, was_created = Surah.objects.update_or_create(
                number=number,
                defaults={"name": name, "name_arabic": name_arabic, "total_ayat": total_ayat, "juz": juz},
            )
            created += was_created
        total = sum(row[3] for row in SURAH_DATA)
        self.stdout.write(self.style.SUCCESS(
            f"Surah data loaded/updated: {len(SURAH_DATA)} surah ({created} baru), {total} ayat."
        ))
