from datetime import datetime

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from project.models import Project, Status as ProjectStatus
from task.models import Priority, Status, Task, TaskDependency

User = get_user_model()

DEMO_TASKS = [
    # title, description, status, priority, start, end, progress
    ('Requirements analysis', 'Collect user needs and write the feature list', Status.COMPLETED, Priority.HIGH, (1, 1), (1, 7), 100),
    ('Pick the tech stack', 'Choose frontend and backend frameworks', Status.COMPLETED, Priority.HIGH, (1, 8), (1, 14), 100),
    ('Frontend development', 'Build the single page client', Status.IN_PROGRESS, Priority.HIGH, (1, 15), (2, 15), 60),
    ('Backend API development', 'Build the REST API', Status.IN_PROGRESS, Priority.HIGH, (1, 20), (2, 20), 40),
    ('Database design', 'Design the schema and relations', Status.COMPLETED, Priority.MEDIUM, (1, 10), (1, 12), 100),
    ('Gantt chart integration', 'Wire the Gantt chart component', Status.TODO, Priority.MEDIUM, (2, 1), (2, 10), 0),
    ('Kanban board', 'Drag and drop board for task status', Status.TODO, Priority.MEDIUM, (2, 5), (2, 15), 0),
    ('File management', 'Upload and manage task attachments', Status.TODO, Priority.LOW, (2, 15), (2, 25), 0),
]

# (task index, prerequisite index)
DEMO_DEPENDENCIES = [(2, 0), (3, 4), (5, 2), (6, 2), (7, 3)]


class Command(BaseCommand):
    help = 'Create a demo user with one sample project, its tasks and dependencies.'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='demo')
        parser.add_argument('--password', default='demo123')
        parser.add_argument('--email', default='demo@projectflow.local')
        parser.add_argument('--year', type=int, default=timezone.now().year)

    @transaction.atomic
    def handle(self, *args, **options):
        user, created = User.objects.get_or_create(
            username=options['username'],
            defaults={'email': options['email']},
        )
        if created:
            user.set_password(options['password'])
            user.save()
            self.stdout.write(f"Created user {user.username} (id {user.id})")
        else:
            self.stdout.write(f"Using existing user {user.username} (id {user.id})")

        year = options['year']

        def at(month_day):
            month, day = month_day
            return timezone.make_aware(datetime(year, month, day))

        project = Project.objects.create(
            name='ProjectFlow development',
            description='Build a modern project management platform',
            status=ProjectStatus.ACTIVE,
            start_date=at((1, 1)),
            end_date=at((12, 31)),
            owner=user,
        )
        self.stdout.write(f"Created project {project.name} (id {project.id})")

        tasks = []
        for title, description, status, priority, start, end, progress in DEMO_TASKS:
            tasks.append(Task.objects.create(
                title=title,
                description=description,
                status=status,
                priority=priority,
                start_date=at(start),
                end_date=at(end),
                progress=progress,
                project=project,
                assignee=user,
            ))

        TaskDependency.objects.bulk_create([
            TaskDependency(task=tasks[task_index], depends_on_task=tasks[prerequisite_index])
            for task_index, prerequisite_index in DEMO_DEPENDENCIES
        ])

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(tasks)} tasks and {len(DEMO_DEPENDENCIES)} dependencies for {user.username}"
        ))
