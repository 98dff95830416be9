"""page/limit pagination used by the list endpoints.

``?page=<n>&limit=<m>`` maps to OFFSET (n-1)*m LIMIT m. Out-of-range pages
return an empty list instead of an error, and the envelope reports the total
count and the number of pages.
"""

import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response


def _positive_int(value, default: int, cap: int | None = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    if number < 1:
        return default
    if cap is not None:
        return min(number, cap)
    return number


class PageLimitPagination(BasePagination):
    default_limit = 10
    max_limit = 100
    results_key = 'results'
    page_key = 'page'

    def paginate_queryset(self, queryset, request, view=None):
        self.page = _positive_int(request.query_params.get('page'), 1)
        self.limit = _positive_int(request.query_params.get('limit'), self.default_limit, cap=self.max_limit)
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return Response({
            self.results_key: data,
            'total': self.total,
            self.page_key: self.page,
            'totalPages': math.ceil(self.total / self.limit) if self.total else 0,
        })
