"""
Task statistics per project.

Everything here is computed from the task rows at read time; nothing is stored
or cached, so the numbers are always consistent with the current tasks.
"""
import math

from django.db.models import Count, Q
from django.utils import timezone

from task.models import Status as TaskStatus

UNASSIGNED = 'Unassigned'

SECONDS_PER_DAY = 24 * 60 * 60


def overall_progress(completed, total):
    """Share of completed tasks as a whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def annotate_task_stats(projects):
    """Attach per-status task counts to every project in the queryset."""
    return projects.annotate(
        task_total=Count('tasks', distinct=True),
        task_completed=Count('tasks', filter=Q(tasks__status=TaskStatus.COMPLETED), distinct=True),
        task_in_progress=Count('tasks', filter=Q(tasks__status=TaskStatus.IN_PROGRESS), distinct=True),
        task_todo=Count('tasks', filter=Q(tasks__status=TaskStatus.TODO), distinct=True),
    )


def task_stats(project):
    """
    ``{total, completed, inProgress, todo}`` for one project, taken from
    :func:`annotate_task_stats` annotations when present.
    """
    if hasattr(project, 'task_total'):
        return {
            'total': project.task_total,
            'completed': project.task_completed,
            'inProgress': project.task_in_progress,
            'todo': project.task_todo,
        }
    return project.tasks.aggregate(
        total=Count('id'),
        completed=Count('id', filter=Q(status=TaskStatus.COMPLETED)),
        inProgress=Count('id', filter=Q(status=TaskStatus.IN_PROGRESS)),
        todo=Count('id', filter=Q(status=TaskStatus.TODO)),
    )


def days_elapsed(start_date, now=None):
    if start_date is None:
        return None
    now = now or timezone.now()
    return math.ceil((now - start_date).total_seconds() / SECONDS_PER_DAY)


def project_stats(project, now=None):
    """Full statistics block served by ``GET /projects/:id/stats``."""
    counts = task_stats(project)
    tasks = project.tasks.all()

    tasks_by_priority = {
        row['priority']: row['count']
        for row in tasks.values('priority').annotate(count=Count('id')).order_by('priority')
    }
    tasks_by_assignee = {}
    for row in tasks.values('assignee__username').annotate(count=Count('id')).order_by('assignee__username'):
        name = row['assignee__username'] or UNASSIGNED
        tasks_by_assignee[name] = tasks_by_assignee.get(name, 0) + row['count']

    return {
        'totalTasks': counts['total'],
        'completedTasks': counts['completed'],
        'inProgressTasks': counts['inProgress'],
        'todoTasks': counts['todo'],
        'overallProgress': overall_progress(counts['completed'], counts['total']),
        'tasksByPriority': tasks_by_priority,
        'tasksByAssignee': tasks_by_assignee,
        'projectDuration': {
            'startDate': project.start_date,
            'endDate': project.end_date,
            'daysElapsed': days_elapsed(project.start_date, now),
        },
    }
