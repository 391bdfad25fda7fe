# apps/core/auth_service.py

"""
Serviço de Autenticação - Encapsula toda lógica de auth do sistema

Registro, login e emissão/verificação dos tokens Bearer (JWT HS256).
As views só traduzem HTTP <-> serviço; nenhuma regra de auth fica nelas.
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

import jwt
from django.conf import settings
from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import AuthError, ConflictError
from .forms import LoginForm, RegisterForm
from .models import User
from .utils import validate_form

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Serviço encapsulado para gerenciar autenticação

    Toda configuração sensível (segredo, algoritmo, validade) vem dos
    settings no momento do uso, então override_settings funciona nos testes.
    """

    INVALID_CREDENTIALS = 'Invalid credentials'

    def register(self, name: str, email: str, password: str) -> Tuple[str, User]:
        """
        Cria novo usuário e já devolve o token de acesso

        Returns:
            Tuple[token, usuario_criado]
        """
        dados = validate_form(RegisterForm(data={
            'name': name,
            'email': email,
            'password': password,
        }))

        # Verificar se usuário já existe
        if self._usuario_existe(dados['email']):
            raise ConflictError()

        try:
            with transaction.atomic():
                usuario = User.objects.create_user(
                    email=dados['email'],
                    password=dados['password'],  # Django já faz hash automaticamente
                    name=dados['name'],
                )
        except IntegrityError:
            # Outro registro com o mesmo email venceu a corrida
            raise ConflictError()

        logger.info(f"👤 Usuário {usuario.id} registrado")
        return self.issue_token(usuario), usuario

    def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Autentica por email e senha

        Email desconhecido e senha errada devolvem exatamente o mesmo erro,
        para não revelar quais emails estão cadastrados.
        """
        dados = validate_form(LoginForm(data={
            'email': email,
            'password': password,
        }))

        usuario = self._autenticar_usuario(dados['email'], dados['password'])
        if usuario is None:
            logger.info("⚠️ Tentativa de login falhada")
            raise AuthError(self.INVALID_CREDENTIALS, status_code=400)

        return self.issue_token(usuario), usuario

    def issue_token(self, usuario: User) -> str:
        """Gera token assinado com id e email do usuário"""
        agora = timezone.now()
        payload = {
            'userId': usuario.id,
            'email': usuario.email,
            'iat': agora,
            'exp': agora + timedelta(days=settings.JWT_EXPIRATION_DAYS),
        }
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

    def verify_token(self, token: Optional[str]) -> int:
        """
        Valida o token e devolve o id do usuário autenticado

        Raises:
            AuthError: token ausente, malformado, expirado ou com assinatura inválida
        """
        if not token:
            raise AuthError('No token, authorization denied')

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=[settings.JWT_ALGORITHM],
                options={'require': ['exp', 'userId']},
            )
        except jwt.ExpiredSignatureError:
            logger.warning("🔒 Token expirado rejeitado")
            raise AuthError('Token has expired')
        except jwt.InvalidTokenError:
            logger.warning("🔒 Token inválido rejeitado")
            raise AuthError('Token is not valid')

        user_id = payload['userId']
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise AuthError('Token is not valid')

        return user_id

    def token_from_header(self, header: Optional[str]) -> Optional[str]:
        """Extrai o token de 'Authorization: Bearer <token>'"""
        if not header:
            return None

        scheme, _, token = header.partition(' ')
        if scheme.lower() != 'bearer':
            return None

        return token.strip() or None

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _usuario_existe(self, email: str) -> bool:
        return User.objects.filter(email=email).exists()

    def _autenticar_usuario(self, email: str, password: str) -> Optional[User]:
        # O ModelBackend roda o hasher mesmo para email desconhecido,
        # então o tempo de resposta não denuncia qual caso ocorreu
        return authenticate(username=email, password=password)


# Instância global do serviço (Singleton pattern)
auth_service = AuthenticationService()
