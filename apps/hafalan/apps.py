from django.apps import AppConfig


class HafalanConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.hafalan'
    verbose_name = 'Hafalan'
