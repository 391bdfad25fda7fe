# apps/core/__init__.py

"""
Core - Identidade e acesso do Task Board

Contém:
- Model de usuário (login por email)
- Serviço de autenticação (registro, login, tokens JWT)
- Guardas de rota por token Bearer
- Taxonomia de erros e middleware do envelope JSON
"""
