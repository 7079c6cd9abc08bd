import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    status = {"db": "unknown"}
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        status["db"] = "ok"
        return JsonResponse({"status": "ok", "components": status}, status=200)
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        status["db"] = "error"
        return JsonResponse(
            {"status": "error", "detail": str(e), "components": status},
            status=503
        )
