#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Task Board - API de boards e todos
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Testes usam banco em memória; o resto usa desenvolvimento por padrão
    if sys.argv[1:2] == ['test']:
        os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')
    else:
        os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Comandos customizados do Task Board
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Comando de setup inicial
        if command == 'setup':
            print("🚀 Configurando Task Board...")

            # Executar migrações
            print("📊 Aplicando migrações...")
            if os.system('python manage.py migrate') != 0:
                print("❌ Erro nas migrações")
                return

            # Verificar consistência dos boards existentes
            print("🔍 Verificando consistência dos boards...")
            os.system('python manage.py check_completion')

            print("✅ Setup concluído!")
            return

        # Comando de configuração do banco
        elif command == 'setup-db':
            print("🐘 Configurando PostgreSQL...")

            # Comandos SQL para executar
            commands = [
                "CREATE USER taskboard_user WITH PASSWORD 'taskboard123';",
                "CREATE DATABASE taskboard OWNER taskboard_user;",
                "GRANT ALL PRIVILEGES ON DATABASE taskboard TO taskboard_user;",
                "ALTER USER taskboard_user CREATEDB;"
            ]

            for cmd in commands:
                print(f"Executando: {cmd}")
                exit_code = os.system(f'psql -U postgres -h localhost -c "{cmd}"')
                if exit_code != 0:
                    print(f"⚠️  Comando pode ter falhado (normal se já existir)")

            # Testar conexão
            print("🧪 Testando conexão...")
            test_result = os.system('psql -U taskboard_user -h localhost -d taskboard -c "SELECT version();"')

            if test_result == 0:
                print("✅ PostgreSQL configurado com sucesso!")
                print("📊 Execute agora: python manage.py setup")
            else:
                print("❌ Erro na configuração. Verifique:")
                print("   1. PostgreSQL está instalado?")
                print("   2. Serviço postgresql está rodando?")
                print("   3. psql está no PATH?")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
