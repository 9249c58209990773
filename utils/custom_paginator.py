import math

from django.core.paginator import Page
from rest_framework import serializers
from rest_framework.pagination import PageNumberPagination

from utils.response import success_response

INVALID_PAGE_MESSAGE = 'Page must be a positive integer'


class CustomPaginator(PageNumberPagination):
    """
    ``?page=&limit=`` pagination wrapped in the API envelope.

    Subclasses name the list key (``results_key``) and the success message.
    A page past the end comes back empty with the requested number.
    """
    page_size = 20
    page_size_query_param = 'limit'
    max_page_size = 100
    results_key = 'items'
    message = 'Fetched successfully'

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        page_size = self.get_page_size(request)
        if not page_size:
            return None

        paginator = self.django_paginator_class(queryset, page_size)
        page_number = self.get_page_number(request, paginator)
        if page_number in self.last_page_strings:
            page_number = paginator.num_pages
        try:
            number = int(page_number)
        except (TypeError, ValueError):
            raise serializers.ValidationError({'page': INVALID_PAGE_MESSAGE})
        if number < 1:
            raise serializers.ValidationError({'page': INVALID_PAGE_MESSAGE})

        if number > paginator.num_pages:
            self.page = Page([], number, paginator)
        else:
            self.page = paginator.page(number)
        return list(self.page)

    def get_paginated_response(self, data):
        limit = self.get_page_size(self.request)
        total = self.page.paginator.count
        return success_response(self.message, {
            self.results_key: data,
            'pagination': {
                'page': self.page.number,
                'limit': limit,
                'total': total,
                'pages': math.ceil(total / limit) if limit else 0,
            },
        })
