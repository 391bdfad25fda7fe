# apps/board/services.py

"""
Serviço de Boards - consistência entre todos e a conclusão do board

Regras encapsuladas aqui:
- Todo acesso passa pelo predicado de dono (user_id no board,
  board__user_id no todo) dentro da própria query que lê ou altera, então
  checar e agir acontecem juntos.
- Board de outro usuário e board inexistente dão o mesmo NotFoundError.
- Mutações que mexem em board e todos ao mesmo tempo rodam numa única
  transação: ou tudo grava, ou nada grava.
"""

import logging
from contextlib import contextmanager
from typing import List, Tuple

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction
from django.db.models import Prefetch
from django.utils import timezone

from apps.core.exceptions import InternalError, NotFoundError
from apps.core.utils import require_flag, validate_form

from .forms import BoardNameForm, CreateBoardForm, CreateTodoForm, TodoTitleForm
from .models import Board, Todo

logger = logging.getLogger(__name__)

BOARD_NOT_FOUND = 'Board not found or unauthorized'
TODO_NOT_FOUND = 'Todo not found or unauthorized'


class BoardService:
    """
    Operações de board/todo de um usuário autenticado

    Args:
        using: alias do banco (o "handle" do store). Injetado para que o
            serviço não dependa de conexão global.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self._db = using

    # =================== BOARDS ===================

    def list_boards(self, user_id: int) -> List[Board]:
        """
        Boards do usuário, mais novo primeiro, cada um com seus todos em
        ordem de criação (board.todo_list)
        """
        todos = Todo.objects.using(self._db).order_by('created_at', 'id')
        return list(
            Board.objects.using(self._db)
            .owned_by(user_id)
            .prefetch_related(Prefetch('todos', queryset=todos, to_attr='todo_list'))
            .order_by('-created_at', '-id')
        )

    def create_board(self, user_id: int, board_name, todo_title) -> Tuple[Board, Todo]:
        """Cria o board e o primeiro todo de forma atômica"""
        dados = validate_form(CreateBoardForm(data={
            'board_name': board_name,
            'todo_title': todo_title,
        }))

        with self._unit_of_work('creating board'):
            board = Board.objects.using(self._db).create(
                user_id=user_id,
                board_name=dados['board_name'],
            )
            todo = Todo.objects.using(self._db).create(
                board=board,
                todo_title=dados['todo_title'],
            )

        logger.info(f"📋 Board {board.id} criado pelo usuário {user_id}")
        return board, todo

    def rename_board(self, user_id: int, board_id: int, board_name) -> Board:
        """Troca o nome; a conclusão não é tocada"""
        dados = validate_form(BoardNameForm(data={'board_name': board_name}))

        with self._unit_of_work('updating board'):
            atualizados = self._boards(user_id).filter(pk=board_id).update(
                board_name=dados['board_name'],
                updated_at=timezone.now(),
            )
            if not atualizados:
                raise NotFoundError(BOARD_NOT_FOUND)
            board = self._boards(user_id).get(pk=board_id)

        return board

    def delete_board(self, user_id: int, board_id: int) -> None:
        """Remove o board; os todos vão junto (cascade)"""
        with self._unit_of_work('deleting board'):
            removidos, _ = self._boards(user_id).filter(pk=board_id).delete()

        if not removidos:
            raise NotFoundError(BOARD_NOT_FOUND)

        logger.info(f"🗑️ Board {board_id} removido pelo usuário {user_id}")

    def set_board_completion(self, user_id: int, board_id: int, is_completed) -> Board:
        """
        Marcação manual da conclusão, independente dos todos

        Válvula de escape: o próximo recálculo (mudança em algum todo)
        volta a derivar o valor dos todos.
        """
        is_completed = require_flag(is_completed)

        with self._unit_of_work('updating board completion'):
            atualizados = self._boards(user_id).filter(pk=board_id).update(
                is_completed=is_completed,
                updated_at=timezone.now(),
            )
            if not atualizados:
                raise NotFoundError(BOARD_NOT_FOUND)
            board = self._boards(user_id).get(pk=board_id)

        return board

    # =================== TODOS ===================

    def create_todo(self, user_id: int, board_id, todo_title) -> Todo:
        """
        Adiciona todo pendente ao board

        Com TASKBOARD_RECOMPUTE_ON_TODO_CREATE (padrão) a conclusão do board
        é recalculada, então um board concluído volta a ficar pendente.
        """
        dados = validate_form(CreateTodoForm(data={
            'board_id': board_id,
            'todo_title': todo_title,
        }))

        with self._unit_of_work('creating todo'):
            board = self._lock_board(user_id, dados['board_id'])
            todo = Todo.objects.using(self._db).create(
                board=board,
                todo_title=dados['todo_title'],
            )
            if settings.TASKBOARD_RECOMPUTE_ON_TODO_CREATE:
                board.recompute_completion(using=self._db)

        logger.debug(f"Todo {todo.id} criado no board {board.id}")
        return todo

    def rename_todo(self, user_id: int, todo_id: int, todo_title) -> Todo:
        """Troca o título; a conclusão não é tocada"""
        dados = validate_form(TodoTitleForm(data={'todo_title': todo_title}))

        with self._unit_of_work('updating todo'):
            atualizados = self._todos(user_id).filter(pk=todo_id).update(
                todo_title=dados['todo_title'],
                updated_at=timezone.now(),
            )
            if not atualizados:
                raise NotFoundError(TODO_NOT_FOUND)
            todo = self._todos(user_id).get(pk=todo_id)

        return todo

    def set_todo_completion(self, user_id: int, todo_id: int, is_completed) -> Tuple[Todo, bool]:
        """
        Marca/desmarca o todo e recalcula o board na mesma transação

        Returns:
            Tuple[todo_atualizado, board_concluido]
        """
        is_completed = require_flag(is_completed)

        with self._unit_of_work('updating todo completion'):
            todo = self._lock_todo(user_id, todo_id)
            todo.is_completed = is_completed
            todo.save(using=self._db, update_fields=['is_completed', 'updated_at'])
            board_completed = todo.board.recompute_completion(using=self._db)

        logger.debug(f"Todo {todo.id} -> {is_completed}; board {todo.board_id} concluído={board_completed}")
        return todo, board_completed

    def delete_todo(self, user_id: int, todo_id: int) -> bool:
        """
        Remove o todo e recalcula o board na mesma transação

        Sem todos restantes o board fica incompleto.

        Returns:
            Conclusão do board após a remoção
        """
        with self._unit_of_work('deleting todo'):
            todo = self._lock_todo(user_id, todo_id)
            board = todo.board
            todo.delete(using=self._db)
            board_completed = board.recompute_completion(using=self._db)

        logger.debug(f"Todo {todo_id} removido; board {board.id} concluído={board_completed}")
        return board_completed

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _boards(self, user_id):
        return Board.objects.using(self._db).owned_by(user_id)

    def _todos(self, user_id):
        return Todo.objects.using(self._db).owned_by(user_id)

    def _lock_board(self, user_id, board_id) -> Board:
        """Board do usuário com lock de linha (só dentro de transação)"""
        board = self._boards(user_id).select_for_update().filter(pk=board_id).first()
        if board is None:
            raise NotFoundError(BOARD_NOT_FOUND)
        return board

    def _lock_todo(self, user_id, todo_id) -> Todo:
        """Todo do usuário com lock no todo e no board (só dentro de transação)"""
        todo = (
            self._todos(user_id)
            .select_related('board')
            .select_for_update()
            .filter(pk=todo_id)
            .first()
        )
        if todo is None:
            raise NotFoundError(TODO_NOT_FOUND)
        return todo

    @contextmanager
    def _unit_of_work(self, operacao: str):
        """
        Transação atômica no banco do serviço

        Falha do banco desfaz tudo e vira InternalError; erros de negócio
        (NotFoundError etc.) também desfazem e seguem como estão.
        """
        try:
            with transaction.atomic(using=self._db):
                yield
        except DatabaseError as exc:
            logger.exception(f"❌ Falha no banco ({operacao})")
            raise InternalError(f'Server error {operacao}') from exc


# Instância global do serviço, ligada ao banco padrão
board_service = BoardService()
