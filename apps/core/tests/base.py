# apps/core/tests/base.py

import json

from django.test import TestCase

from apps.core.auth_service import auth_service
from apps.core.models import User


class ApiTestCase(TestCase):
    """Base dos testes da API: cria usuários e faz requests JSON com token"""

    password = 'secret123'

    def create_user(self, email='ana@example.com', name='Ana'):
        return User.objects.create_user(email=email, password=self.password, name=name)

    def token_for(self, user):
        return auth_service.issue_token(user)

    def api(self, method, url, payload=None, token=None):
        extra = {}
        if token:
            extra['HTTP_AUTHORIZATION'] = f'Bearer {token}'

        body = json.dumps(payload) if payload is not None else ''
        return getattr(self.client, method)(
            url, data=body, content_type='application/json', **extra
        )
