# apps/reports/services.py
from django.contrib.contenttypes.models import ContentType
from .models import ActivityLog


class ActivityLogger:
    @staticmethod
    def log(user, obj, action, project=None, details=None):
        """
        Uniwersalna metoda do logowania zdarzeń w organizacji użytkownika.
        """
        if not user or not user.is_authenticated or not user.organization_id:
            return None  # Bez organizacji nie ma gdzie logować

        return ActivityLog.objects.create(
            user=user,
            organization_id=user.organization_id,
            project=project,
            content_type=ContentType.objects.get_for_model(obj),
            object_id=obj.id,
            action=action,
            details=details or {}
        )
