from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """
    Admin tables page through fruits, customers, orders and payments with ?page=&limit=.
    """
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100
