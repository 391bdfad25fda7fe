# apps/core/exceptions.py

"""
Taxonomia de erros da API

Cada erro carrega a mensagem e o status HTTP que o middleware usa para
montar o envelope {success: false, ...}. Erros de validação e autenticação
são levantados antes de qualquer escrita no banco.
"""


class ServiceError(Exception):
    """Erro base dos serviços - sempre vira resposta JSON"""

    status_code = 500
    default_message = 'Server error'

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def as_dict(self):
        return {
            'success': False,
            'message': self.message,
        }


class ValidationError(ServiceError):
    """Entrada malformada ou ausente - o cliente deve corrigir e reenviar"""

    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def as_dict(self):
        data = super().as_dict()
        if self.errors:
            data['errors'] = self.errors
        return data


class ConflictError(ServiceError):
    """Email já cadastrado"""

    status_code = 400
    default_message = 'User already exists with this email'


class AuthError(ServiceError):
    """Credenciais inválidas ou token ausente/inválido/expirado"""

    status_code = 401
    default_message = 'Token is not valid'


class NotFoundError(ServiceError):
    """
    Recurso inexistente ou de outro usuário

    Os dois casos são propositalmente indistinguíveis.
    """

    status_code = 404
    default_message = 'Not found'


class InternalError(ServiceError):
    """Falha do banco ou erro inesperado"""

    status_code = 500
    default_message = 'Server error'
