from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    name = 'apps.notifications'
    default_auto_field = 'django.db.models.BigAutoField'

    def ready(self):
        # Connect the request_transitioned receiver
        from . import dispatcher  # noqa: F401
