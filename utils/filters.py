import re

from rest_framework import filters, serializers

ALL = 'all'

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_snake(name):
    return _CAMEL_BOUNDARY.sub('_', name).lower()


class SortByOrderingFilter(filters.OrderingFilter):
    """
    Ordering driven by ``?sortBy=createdAt&sortOrder=desc``.

    ``sortBy`` may be camelCase or snake_case; it must name one of the view's
    ``ordering_fields``, otherwise the view's default ``ordering`` applies.
    ``sortOrder`` defaults to descending.
    """
    sort_param = 'sortBy'
    order_param = 'sortOrder'

    def get_ordering(self, request, queryset, view):
        sort_by = request.query_params.get(self.sort_param)
        if sort_by:
            field = camel_to_snake(sort_by.strip())
            if self.remove_invalid_fields(queryset, [field], view, request):
                descending = request.query_params.get(self.order_param, 'desc').lower() != 'asc'
                return [f'-{field}' if descending else field, '-id' if descending else 'id']
        return self.get_default_ordering(view)


def parse_id(value, field, message):
    """Query-string id to int; only ASCII digits count."""
    if not (value.isascii() and value.isdecimal()):
        raise serializers.ValidationError({field: message})
    return int(value)
