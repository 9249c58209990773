import django_filters

from task.models import Task
from utils.filters import ALL, parse_id


class TaskFilter(django_filters.FilterSet):
    """
    Exact-match task filters. ``all`` switches a filter off, the way the
    client's select boxes send it.
    """
    projectId = django_filters.NumberFilter(field_name='project_id')
    status = django_filters.CharFilter(method='filter_unless_all')
    priority = django_filters.CharFilter(method='filter_unless_all')
    assigneeId = django_filters.CharFilter(method='filter_assignee')

    class Meta:
        model = Task
        fields = []

    def filter_unless_all(self, queryset, name, value):
        if value == ALL:
            return queryset
        return queryset.filter(**{name: value})

    def filter_assignee(self, queryset, name, value):
        if value == ALL:
            return queryset
        assignee_id = parse_id(value, 'assigneeId', 'Assignee ID must be a positive integer')
        return queryset.filter(assignee_id=assignee_id)
