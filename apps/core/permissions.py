# apps/core/permissions.py

from .auth_service import auth_service


def authenticate_request(request) -> int:
    """
    Valida o header Authorization e marca o request com o usuário

    Levanta AuthError; quem converte em resposta JSON é o middleware.
    """
    token = auth_service.token_from_header(request.headers.get('Authorization'))
    request.user_id = auth_service.verify_token(token)
    return request.user_id


# Mixins para Class-Based Views

class TokenRequiredMixin:
    """Mixin que exige token Bearer válido antes de despachar o método"""

    def dispatch(self, request, *args, **kwargs):
        authenticate_request(request)
        return super().dispatch(request, *args, **kwargs)
