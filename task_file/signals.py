import logging

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from task_file.models import TaskFile

logger = logging.getLogger(__name__)


def _delete_stored_file(storage, name, file_id):
    try:
        storage.delete(name)
    except OSError:
        logger.warning(f"Could not remove stored file {name} for task file {file_id}", exc_info=True)


@receiver(post_delete, sender=TaskFile)
def remove_stored_file(sender, instance, **kwargs):
    """Runs for direct deletes and for task/project cascades alike."""
    if not instance.file:
        return
    # a rolled-back delete keeps its file
    name, storage, file_id = instance.file.name, instance.file.storage, instance.id
    transaction.on_commit(lambda: _delete_stored_file(storage, name, file_id))
