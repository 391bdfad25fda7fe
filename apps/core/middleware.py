# apps/core/middleware.py

import logging

from django.http import Http404, JsonResponse

from .exceptions import InternalError, ServiceError

logger = logging.getLogger(__name__)


class ApiExceptionMiddleware:
    """
    Middleware que converte erros das views no envelope JSON da API

    ServiceError vira {success: false, message[, errors]} com o status do
    próprio erro. Qualquer outra exceção é logada com traceback e vira 500
    genérico, sem vazar detalhes internos para o cliente.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, Http404):
            return None  # handler404 responde no mesmo envelope

        if isinstance(exception, ServiceError):
            if exception.status_code >= 500:
                logger.error(f"❌ {request.method} {request.path}: {exception.message}")
            else:
                logger.debug(f"{request.method} {request.path} -> {exception.status_code}: {exception.message}")
            return JsonResponse(exception.as_dict(), status=exception.status_code)

        logger.exception(f"❌ Erro inesperado em {request.method} {request.path}")
        erro = InternalError()
        return JsonResponse(erro.as_dict(), status=erro.status_code)
