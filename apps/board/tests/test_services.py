# apps/board/tests/test_services.py

from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.board.models import Board, Todo
from apps.board.services import BoardService, board_service
from apps.core.exceptions import InternalError, NotFoundError, ValidationError
from apps.core.models import User


class BoardServiceTestCase(TestCase):

    def setUp(self):
        self.ana = User.objects.create_user(email='ana@example.com', password='secret123', name='Ana')
        self.bruno = User.objects.create_user(email='bruno@example.com', password='secret123', name='Bruno')
        self.service = board_service

    def assertCompletionConsistent(self, board):
        """is_completed gravado == (tem todos e todos concluídos)"""
        board.refresh_from_db()
        todos = list(board.todos.all())
        esperado = bool(todos) and all(todo.is_completed for todo in todos)
        self.assertEqual(board.is_completed, esperado)


class CreateBoardTests(BoardServiceTestCase):

    def test_creates_board_with_first_todo(self):
        board, todo = self.service.create_board(self.ana.id, 'Work', 'Write report')

        self.assertEqual(board.user_id, self.ana.id)
        self.assertEqual(board.board_name, 'Work')
        self.assertFalse(board.is_completed)
        self.assertEqual(todo.board_id, board.id)
        self.assertEqual(todo.todo_title, 'Write report')
        self.assertFalse(todo.is_completed)
        self.assertCompletionConsistent(board)

    def test_names_are_trimmed(self):
        board, todo = self.service.create_board(self.ana.id, '  Work  ', '  Write report ')

        self.assertEqual(board.board_name, 'Work')
        self.assertEqual(todo.todo_title, 'Write report')

    def test_blank_names_are_rejected_before_writing(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_board(self.ana.id, '   ', None)

        campos = {erro['field'] for erro in ctx.exception.errors}
        self.assertEqual(campos, {'board_name', 'todo_title'})
        self.assertFalse(Board.objects.exists())

    def test_non_string_names_are_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_board(self.ana.id, {'x': 1}, ['a', 'b'])

        self.assertEqual(ctx.exception.errors, [
            {'field': 'board_name', 'message': 'Board name must be a string'},
            {'field': 'todo_title', 'message': 'Initial todo must be a string'},
        ])
        self.assertFalse(Board.objects.exists())

    def test_failure_on_first_todo_leaves_no_board(self):
        with mock.patch.object(Todo, 'save', side_effect=DatabaseError('disk full')):
            with self.assertRaises(InternalError) as ctx:
                self.service.create_board(self.ana.id, 'Work', 'Write report')

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertFalse(Board.objects.exists())
        self.assertFalse(Todo.objects.exists())


class ListBoardsTests(BoardServiceTestCase):

    def test_lists_only_own_boards_newest_first(self):
        antigo, _ = self.service.create_board(self.ana.id, 'Old', 'a')
        novo, _ = self.service.create_board(self.ana.id, 'New', 'b')
        self.service.create_board(self.bruno.id, 'Other', 'c')

        boards = self.service.list_boards(self.ana.id)

        self.assertEqual([board.id for board in boards], [novo.id, antigo.id])

    def test_todos_come_oldest_first(self):
        board, primeiro = self.service.create_board(self.ana.id, 'Work', 'first')
        segundo = self.service.create_todo(self.ana.id, board.id, 'second')

        [listado] = self.service.list_boards(self.ana.id)

        self.assertEqual([todo.id for todo in listado.todo_list], [primeiro.id, segundo.id])

    def test_board_without_todos_has_empty_list(self):
        board, todo = self.service.create_board(self.ana.id, 'Work', 'only')
        self.service.delete_todo(self.ana.id, todo.id)

        [listado] = self.service.list_boards(self.ana.id)

        self.assertEqual(listado.todo_list, [])
        self.assertFalse(listado.is_completed)

    def test_user_without_boards(self):
        self.assertEqual(self.service.list_boards(self.bruno.id), [])


class BoardMutationTests(BoardServiceTestCase):

    def setUp(self):
        super().setUp()
        self.board, self.todo = self.service.create_board(self.ana.id, 'Work', 'Write report')

    def test_rename_round_trip_keeps_completion(self):
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        board = self.service.rename_board(self.ana.id, self.board.id, ' Office ')

        self.assertEqual(board.board_name, 'Office')
        self.assertTrue(board.is_completed)
        [listado] = self.service.list_boards(self.ana.id)
        self.assertEqual(listado.board_name, 'Office')

    def test_rename_requires_a_name(self):
        with self.assertRaises(ValidationError):
            self.service.rename_board(self.ana.id, self.board.id, '')

    def test_rename_foreign_or_missing_board(self):
        for user_id, board_id in ((self.bruno.id, self.board.id), (self.ana.id, 99999)):
            with self.assertRaises(NotFoundError) as ctx:
                self.service.rename_board(user_id, board_id, 'Hijack')
            self.assertEqual(ctx.exception.message, 'Board not found or unauthorized')

        self.board.refresh_from_db()
        self.assertEqual(self.board.board_name, 'Work')

    def test_delete_removes_board_and_todos(self):
        self.service.create_todo(self.ana.id, self.board.id, 'Another')

        self.service.delete_board(self.ana.id, self.board.id)

        self.assertFalse(Board.objects.filter(pk=self.board.id).exists())
        self.assertFalse(Todo.objects.filter(board_id=self.board.id).exists())

    def test_delete_foreign_board_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.delete_board(self.bruno.id, self.board.id)

        self.assertTrue(Board.objects.filter(pk=self.board.id).exists())

    def test_manual_completion_overrides_todos(self):
        board = self.service.set_board_completion(self.ana.id, self.board.id, True)

        self.assertTrue(board.is_completed)
        self.todo.refresh_from_db()
        self.assertFalse(self.todo.is_completed)

    def test_manual_completion_is_undone_by_next_todo_change(self):
        self.service.set_board_completion(self.ana.id, self.board.id, True)

        _, board_completed = self.service.set_todo_completion(self.ana.id, self.todo.id, False)

        self.assertFalse(board_completed)
        self.assertCompletionConsistent(self.board)

    def test_manual_completion_requires_boolean(self):
        for valor in ('true', 1, None):
            with self.assertRaises(ValidationError):
                self.service.set_board_completion(self.ana.id, self.board.id, valor)

    def test_manual_completion_on_foreign_board(self):
        with self.assertRaises(NotFoundError):
            self.service.set_board_completion(self.bruno.id, self.board.id, True)

        self.board.refresh_from_db()
        self.assertFalse(self.board.is_completed)


class TodoMutationTests(BoardServiceTestCase):

    def setUp(self):
        super().setUp()
        self.board, self.todo = self.service.create_board(self.ana.id, 'Work', 'Draft')

    def test_create_todo_on_foreign_board(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.service.create_todo(self.bruno.id, self.board.id, 'Sneaky')

        self.assertEqual(ctx.exception.message, 'Board not found or unauthorized')
        self.assertEqual(self.board.todos.count(), 1)

    def test_create_todo_validation(self):
        with self.assertRaises(ValidationError) as ctx:
            self.service.create_todo(self.ana.id, None, '')

        campos = {erro['field'] for erro in ctx.exception.errors}
        self.assertEqual(campos, {'board_id', 'todo_title'})

    def test_non_string_titles_are_rejected(self):
        for titulo in ({'x': 1}, ['Review'], 42):
            with self.assertRaises(ValidationError):
                self.service.create_todo(self.ana.id, self.board.id, titulo)
            with self.assertRaises(ValidationError):
                self.service.rename_todo(self.ana.id, self.todo.id, titulo)
            with self.assertRaises(ValidationError):
                self.service.rename_board(self.ana.id, self.board.id, titulo)

        self.assertEqual(self.board.todos.count(), 1)
        self.todo.refresh_from_db()
        self.assertEqual(self.todo.todo_title, 'Draft')

    def test_rename_todo_keeps_completion(self):
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        todo = self.service.rename_todo(self.ana.id, self.todo.id, 'Final draft')

        self.assertEqual(todo.todo_title, 'Final draft')
        self.assertTrue(todo.is_completed)

    def test_foreign_todo_operations_are_not_found(self):
        with self.assertRaises(NotFoundError):
            self.service.rename_todo(self.bruno.id, self.todo.id, 'Hijack')
        with self.assertRaises(NotFoundError):
            self.service.set_todo_completion(self.bruno.id, self.todo.id, True)
        with self.assertRaises(NotFoundError) as ctx:
            self.service.delete_todo(self.bruno.id, self.todo.id)

        self.assertEqual(ctx.exception.message, 'Todo not found or unauthorized')
        self.todo.refresh_from_db()
        self.assertEqual(self.todo.todo_title, 'Draft')
        self.assertFalse(self.todo.is_completed)

    def test_todo_completion_requires_boolean(self):
        with self.assertRaises(ValidationError):
            self.service.set_todo_completion(self.ana.id, self.todo.id, 'yes')

    def test_work_board_scenario(self):
        # Draft e Review: o board só conclui quando os dois concluem
        review = self.service.create_todo(self.ana.id, self.board.id, 'Review')

        _, concluido = self.service.set_todo_completion(self.ana.id, self.todo.id, True)
        self.assertFalse(concluido)
        self.assertCompletionConsistent(self.board)

        _, concluido = self.service.set_todo_completion(self.ana.id, review.id, True)
        self.assertTrue(concluido)
        self.assertCompletionConsistent(self.board)

        _, concluido = self.service.set_todo_completion(self.ana.id, review.id, False)
        self.assertFalse(concluido)
        self.assertCompletionConsistent(self.board)

    def test_new_todo_reopens_completed_board(self):
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        self.service.create_todo(self.ana.id, self.board.id, 'Publish')

        self.board.refresh_from_db()
        self.assertFalse(self.board.is_completed)
        self.assertCompletionConsistent(self.board)

    @override_settings(TASKBOARD_RECOMPUTE_ON_TODO_CREATE=False)
    def test_legacy_create_todo_keeps_board_completed(self):
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        self.service.create_todo(self.ana.id, self.board.id, 'Publish')

        self.board.refresh_from_db()
        self.assertTrue(self.board.is_completed)

    def test_deleting_pending_todo_completes_board(self):
        pendente = self.service.create_todo(self.ana.id, self.board.id, 'Review')
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        concluido = self.service.delete_todo(self.ana.id, pendente.id)

        self.assertTrue(concluido)
        self.assertCompletionConsistent(self.board)

    def test_deleting_last_todo_leaves_board_incomplete(self):
        outro = self.service.create_todo(self.ana.id, self.board.id, 'Review')
        self.service.set_todo_completion(self.ana.id, self.todo.id, True)
        self.service.set_todo_completion(self.ana.id, outro.id, True)

        self.assertTrue(self.service.delete_todo(self.ana.id, outro.id))
        self.assertFalse(self.service.delete_todo(self.ana.id, self.todo.id))
        self.assertCompletionConsistent(self.board)

    def test_deleting_last_todo_clears_manual_completion(self):
        self.service.set_board_completion(self.ana.id, self.board.id, True)

        self.assertFalse(self.service.delete_todo(self.ana.id, self.todo.id))

    def test_failed_recompute_rolls_back_todo_change(self):
        with mock.patch.object(Board, 'recompute_completion', side_effect=DatabaseError('lost connection')):
            with self.assertRaises(InternalError):
                self.service.set_todo_completion(self.ana.id, self.todo.id, True)

        self.todo.refresh_from_db()
        self.assertFalse(self.todo.is_completed)
        self.assertCompletionConsistent(self.board)

    def test_failed_recompute_keeps_deleted_todo(self):
        with mock.patch.object(Board, 'recompute_completion', side_effect=DatabaseError('lost connection')):
            with self.assertRaises(InternalError):
                self.service.delete_todo(self.ana.id, self.todo.id)

        self.assertTrue(Todo.objects.filter(pk=self.todo.id).exists())

    def test_completion_stays_consistent_through_mixed_operations(self):
        service = BoardService(using='default')
        todos = [self.todo] + [
            service.create_todo(self.ana.id, self.board.id, f'Step {n}') for n in range(3)
        ]

        operacoes = [
            lambda: service.set_todo_completion(self.ana.id, todos[0].id, True),
            lambda: service.set_todo_completion(self.ana.id, todos[1].id, True),
            lambda: service.delete_todo(self.ana.id, todos[2].id),
            lambda: service.set_todo_completion(self.ana.id, todos[3].id, True),
            lambda: service.create_todo(self.ana.id, self.board.id, 'Late addition'),
            lambda: service.set_todo_completion(self.ana.id, todos[0].id, False),
            lambda: service.delete_todo(self.ana.id, todos[0].id),
        ]
        for operacao in operacoes:
            operacao()
            self.assertCompletionConsistent(self.board)
