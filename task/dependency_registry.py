"""
Directed edges between tasks: ``task`` depends on ``depends_on_task``.

Edges are only ever created between tasks the caller owns. Self-loops and
duplicate pairs are rejected. Longer cycles (A -> B -> A) are accepted:
dependencies are advisory and nothing schedules by them.
"""
import logging

from django.db import IntegrityError, transaction
from rest_framework import serializers
from rest_framework.exceptions import NotFound

from task.models import Task, TaskDependency

logger = logging.getLogger(__name__)


def owned_tasks(user):
    return Task.objects.filter(project__owner=user)


def add_dependency(user, task_id, depends_on_task_id):
    if task_id == depends_on_task_id:
        raise serializers.ValidationError({'dependsOnTaskId': 'A task cannot depend on itself'})

    found = owned_tasks(user).in_bulk([task_id, depends_on_task_id])
    if task_id not in found or depends_on_task_id not in found:
        raise serializers.ValidationError({'taskId': 'Task not found or access denied'})

    duplicate = serializers.ValidationError({'dependsOnTaskId': 'Task dependency already exists'})
    if TaskDependency.objects.filter(task_id=task_id, depends_on_task_id=depends_on_task_id).exists():
        raise duplicate

    # a concurrent insert of the same pair still hits the unique constraint
    try:
        with transaction.atomic():
            edge = TaskDependency.objects.create(task_id=task_id, depends_on_task_id=depends_on_task_id)
    except IntegrityError:
        raise duplicate

    logger.info(f"Task {task_id} now depends on task {depends_on_task_id}")
    return edge


def add_dependencies(task, depends_on_ids):
    """Edges from a newly created task; ``depends_on_ids`` are already known to be owned."""
    edges = [
        TaskDependency(task=task, depends_on_task_id=depends_on_id)
        for depends_on_id in dict.fromkeys(depends_on_ids)
        if depends_on_id != task.pk
    ]
    return TaskDependency.objects.bulk_create(edges)


def remove_dependency(user, task_id, depends_on_task_id):
    deleted, _ = TaskDependency.objects.filter(
        task_id=task_id,
        depends_on_task_id=depends_on_task_id,
        task__project__owner=user,
    ).delete()
    if not deleted:
        raise NotFound('Task dependency not found')
    logger.info(f"Task {task_id} no longer depends on task {depends_on_task_id}")


def edges_for(task):
    """Both directions: what ``task`` waits on, and what waits on ``task``."""
    return {
        'dependencies': task.dependencies.select_related('depends_on_task').order_by('id'),
        'dependents': task.dependents.select_related('task').order_by('id'),
    }
