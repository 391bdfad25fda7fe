# apps/core/utils.py

import json
from functools import wraps
from typing import Dict, Iterable, List

from django.http import JsonResponse

from .exceptions import ValidationError


def parse_json_body(request) -> Dict:
    """
    Lê o corpo JSON do request

    Corpo vazio vira dict vazio; qualquer coisa que não seja um objeto JSON
    é erro de validação.
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Request body must be valid JSON')

    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    return data


def form_errors(form) -> List[Dict]:
    """
    Converte erros de um Django Form na lista do envelope da API
    Ex: [{'field': 'email', 'message': 'Please enter a valid email'}]
    """
    errors = []
    for field, messages in form.errors.items():
        for message in messages:
            errors.append({'field': field, 'message': message})
    return errors


def validate_form(form):
    """Valida o form e devolve cleaned_data, ou levanta ValidationError"""
    if not form.is_valid():
        raise ValidationError(errors=form_errors(form))
    return form.cleaned_data


def require_flag(value, field: str = 'is_completed') -> bool:
    """Aceita apenas booleano JSON de verdade (nada de "true" ou 1)"""
    if not isinstance(value, bool):
        raise ValidationError(errors=[
            {'field': field, 'message': f'{field} must be a boolean'}
        ])
    return value


# Métodos HTTP

def method_not_allowed(allowed: Iterable[str]) -> JsonResponse:
    """405 no envelope da API, com o header Allow"""
    response = JsonResponse({'success': False, 'message': 'Method not allowed'}, status=405)
    response['Allow'] = ', '.join(allowed)
    return response


def require_methods(*methods):
    """
    Igual ao require_http_methods do Django, mas responde 405 em JSON
    Ex: @require_methods('POST')
    """

    def decorator(view_func):
        @wraps(view_func)
        def inner(request, *args, **kwargs):
            if request.method not in methods:
                return method_not_allowed(methods)
            return view_func(request, *args, **kwargs)

        return inner

    return decorator
