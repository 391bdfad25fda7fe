# apps/board/__init__.py

"""
Board - Boards e todos do Task Board

Funcionalidades:
- Boards de um único dono, cada um com sua lista de todos
- Conclusão do board derivada dos todos (recalculada na mesma transação)
- API JSON protegida por token Bearer
- Comando check_completion para auditar/corrigir boards
"""
