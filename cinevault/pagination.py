from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PageLimitPagination(PageNumberPagination):
    """
    1-indexed ``?page=`` / ``?limit=`` pagination.

    Response body: {"results": [...], "pagination": {current, pages, total, limit}}
    """

    page_size = settings.PAGE_SIZE
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response({
            "results": data,
            "pagination": {
                "current": self.page.number,
                "pages": paginator.num_pages,
                "total": paginator.count,
                "limit": paginator.per_page,
            },
        })
