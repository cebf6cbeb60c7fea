from django.apps import AppConfig

class DiscussionsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.discussions'
    label = 'discussions'
