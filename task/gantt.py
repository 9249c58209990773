"""
Chart-ready records for the Gantt view.

The fallbacks below are display placeholders computed at read time; they are
never written back to the task.
"""
from datetime import timedelta

PRIORITY_COLORS = {
    'urgent': '#ff4d4f',  # red
    'high': '#ff7a45',    # orange
    'medium': '#ffa940',  # amber
    'low': '#52c41a',     # green
}
DEFAULT_COLOR = '#1890ff'  # blue

MILESTONE_PROGRESS_COLOR = '#52c41a'
TASK_PROGRESS_COLOR = '#1890ff'

PLACEHOLDER_DURATION = timedelta(days=7)


def priority_color(priority):
    return PRIORITY_COLORS.get(priority, DEFAULT_COLOR)


def to_gantt_record(task):
    start = task.start_date or task.created_at
    end = task.end_date or task.created_at + PLACEHOLDER_DURATION
    milestone = task.progress == 100
    color = priority_color(task.priority)

    return {
        'id': str(task.pk),
        'name': task.title,
        'start': start,
        'end': end,
        'progress': task.progress,
        'dependencies': [str(edge.depends_on_task_id) for edge in task.dependencies.all()],
        'type': 'milestone' if milestone else 'task',
        'project': task.project.name,
        'color': color,
        'styles': {
            'backgroundColor': color,
            'progressColor': MILESTONE_PROGRESS_COLOR if milestone else TASK_PROGRESS_COLOR,
        },
    }


def to_gantt_records(tasks):
    return [to_gantt_record(task) for task in tasks]
