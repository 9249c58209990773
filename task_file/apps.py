from django.apps import AppConfig


class TaskFileConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'task_file'

    def ready(self):
        from task_file import signals  # noqa: F401
