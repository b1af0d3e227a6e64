from django.apps import AppConfig


class MakroNewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "makro_news"
    verbose_name = "Makro news"
