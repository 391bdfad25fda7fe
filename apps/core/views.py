# apps/core/views.py

from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt

from .auth_service import auth_service  # Importando nosso serviço encapsulado
from .exceptions import InternalError, NotFoundError
from .models import User
from .utils import parse_json_body, require_methods


@csrf_exempt
@require_methods('POST')
def register_view(request):
    """
    Registro de usuário

    O encapsulamento aqui separa a lógica HTTP (view) da lógica de autenticação (service)
    """
    data = parse_json_body(request)

    token, usuario = auth_service.register(
        data.get('name'), data.get('email'), data.get('password')
    )

    return JsonResponse({
        'success': True,
        'message': 'Successfully registered',
        'token': token,
        'user': usuario.as_public_dict(),
    }, status=201)


@csrf_exempt
@require_methods('POST')
def login_view(request):
    """Login por email e senha; devolve o mesmo formato do registro"""
    data = parse_json_body(request)

    token, usuario = auth_service.login(data.get('email'), data.get('password'))

    return JsonResponse({
        'success': True,
        'message': 'Successfully logged in',
        'token': token,
        'user': usuario.as_public_dict(),
    })


@require_methods('GET')
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        User.objects.exists()

        # Verificar cache
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        status = {
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': settings.TASKBOARD_VERSION
        }

        return JsonResponse(status)

    except Exception as e:
        # Banco ou cache fora do ar: reportar em vez de propagar
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': settings.TASKBOARD_VERSION
        }

        return JsonResponse(status, status=500)


# Handlers globais (config/urls.py)

def api_not_found(request, exception=None):
    """404 de rota inexistente no envelope da API"""
    erro = NotFoundError('Route not found')
    return JsonResponse(erro.as_dict(), status=erro.status_code)


def api_server_error(request):
    """500 não tratado no envelope da API"""
    erro = InternalError()
    return JsonResponse(erro.as_dict(), status=erro.status_code)
