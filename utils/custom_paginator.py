from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class CustomPaginator(PageNumberPagination):
    """
    Opt-in pagination: lists are returned as plain arrays unless the client
    asks for a page size with ``?page_size=``.
    """
    page_size = None
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response({
            'totalItems': paginator.count,
            'currentPage': self.page.number,
            'totalPages': paginator.num_pages,
            'next': self.get_next_link(),
            'previous': self.get_previous_link(),
            'results': data,
        })
