from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class LessonsAppConfig(AppConfig):
    name = "apps.lessonsapp"
    verbose_name = _("Lessons")
    default_auto_field = "django.db.models.BigAutoField"
