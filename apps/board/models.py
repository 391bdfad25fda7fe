# apps/board/models.py

from django.conf import settings
from django.db import models
from django.db.models import Count, Q
from django.utils import timezone


class BoardQuerySet(models.QuerySet):

    def owned_by(self, user_id):
        """Boards visíveis para o usuário - apenas os dele"""
        return self.filter(user_id=user_id)


class Board(models.Model):
    """
    Board de todos de um único usuário

    is_completed é derivado dos todos: verdadeiro apenas quando existe pelo
    menos um todo e todos estão concluídos. O único caminho que foge disso é
    a marcação manual (BoardService.set_board_completion), desfeita no
    próximo recálculo.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='boards'
    )
    board_name = models.CharField(max_length=255)
    is_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BoardQuerySet.as_manager()

    class Meta:
        db_table = 'boards'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='boards_user_created_idx'),
        ]

    def __str__(self):
        return self.board_name

    def completion_from_todos(self, using=None):
        """Conclusão calculada a partir dos todos atuais (sem gravar)"""
        stats = Todo.objects.using(using or self._state.db).filter(board_id=self.pk).aggregate(
            total=Count('id'),
            pending=Count('id', filter=Q(is_completed=False)),
        )
        return stats['total'] > 0 and stats['pending'] == 0

    def recompute_completion(self, using=None):
        """
        Recalcula e grava is_completed a partir dos todos

        Board sem todos fica incompleto. Deve rodar na mesma transação da
        mutação do todo que o motivou.
        """
        db = using or self._state.db
        completed = self.completion_from_todos(using=db)
        self.updated_at = timezone.now()
        Board.objects.using(db).filter(pk=self.pk).update(
            is_completed=completed,
            updated_at=self.updated_at,
        )
        self.is_completed = completed
        return completed

    def as_dict(self, todos=None):
        data = {
            'id': self.id,
            'user_id': self.user_id,
            'board_name': self.board_name,
            'is_completed': self.is_completed,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if todos is not None:
            data['todos'] = [todo.as_dict() for todo in todos]
        return data


class TodoQuerySet(models.QuerySet):

    def owned_by(self, user_id):
        """Todos cujo board pertence ao usuário (cadeia User -> Board -> Todo)"""
        return self.filter(board__user_id=user_id)


class Todo(models.Model):
    """Item de tarefa de um board"""

    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='todos'
    )
    todo_title = models.CharField(max_length=500)
    is_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TodoQuerySet.as_manager()

    class Meta:
        db_table = 'todos'
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.todo_title

    def as_dict(self):
        return {
            'id': self.id,
            'board_id': self.board_id,
            'todo_title': self.todo_title,
            'is_completed': self.is_completed,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
