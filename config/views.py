from django.db import connection
from django.http import JsonResponse


def health_check(request):
    """Liveness check that also pings the database."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    return JsonResponse({
        'message': 'Ressource introuvable.',
        'code': 'not_found',
    }, status=404)


def error_500(request):
    return JsonResponse({
        'message': 'Une erreur serveur est survenue. Veuillez réessayer.',
        'code': 'server_error',
    }, status=500)
