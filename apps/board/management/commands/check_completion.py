# apps/board/management/commands/check_completion.py

from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS, connections, transaction

from apps.board.models import Board


class Command(BaseCommand):
    help = 'Verifica se a conclusão de cada board bate com seus todos (e corrige com --fix)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Recalcula os boards divergentes a partir dos todos'
        )
        parser.add_argument(
            '--database',
            default=DEFAULT_DB_ALIAS,
            help='Alias do banco a verificar'
        )

    def handle(self, *args, **options):
        """
        Percorre todos os boards comparando is_completed com o valor
        derivado dos todos. Divergência é esperada apenas depois de uma
        marcação manual (PATCH /boards/<id>/complete).
        """
        banco = options['database']

        self.stdout.write('🔍 Verificando conclusão dos boards...')
        self._testar_conectividade_banco(banco)

        divergentes = []
        for board in Board.objects.using(banco).order_by('id').iterator():
            esperado = board.completion_from_todos(using=banco)
            if board.is_completed != esperado:
                divergentes.append(board)
                self.stdout.write(
                    self.style.WARNING(
                        f'  ⚠️  Board {board.id} ("{board.board_name}"): '
                        f'is_completed={board.is_completed}, esperado={esperado}'
                    )
                )

        if not divergentes:
            self.stdout.write(self.style.SUCCESS('✅ Todos os boards estão consistentes'))
            return

        if not options['fix']:
            self.stdout.write(
                self.style.WARNING(
                    f'{len(divergentes)} board(s) divergente(s). '
                    f'Execute com --fix para recalcular.'
                )
            )
            return

        for board in divergentes:
            with transaction.atomic(using=banco):
                board.recompute_completion(using=banco)

        self.stdout.write(
            self.style.SUCCESS(f'✅ {len(divergentes)} board(s) recalculado(s)')
        )

    def _testar_conectividade_banco(self, banco):
        """Testa conectividade básica"""
        with connections[banco].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
