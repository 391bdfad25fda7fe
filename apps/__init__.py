# apps/__init__.py

"""
Task Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Usuários, autenticação por token e envelope de erros da API
- board: Boards, todos e a consistência de conclusão entre eles
"""

__version__ = '1.0.0'
__author__ = 'Equipe Task Board'
