"""
Pagination utilities for the project.

Message history is returned in full by default; clients that send a
``cursor`` or ``page_size`` parameter get cursor pages instead, ordered
on the same (created_at, id) key as the unpaginated listing.
"""
from rest_framework.pagination import CursorPagination


class MessageCursorPagination(CursorPagination):
    page_size = 50
    max_page_size = 200
    page_size_query_param = "page_size"
    ordering = ("created_at", "id")

    def is_requested(self, request) -> bool:
        params = request.query_params
        return self.cursor_query_param in params or self.page_size_query_param in params
