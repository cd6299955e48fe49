from django.apps import AppConfig


class PeternakConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'peternak'
    verbose_name = 'Peternak'
