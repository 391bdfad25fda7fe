# apps/board/views.py

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.core.permissions import TokenRequiredMixin
from apps.core.utils import method_not_allowed, parse_json_body

from .services import board_service


@method_decorator(csrf_exempt, name='dispatch')
class ApiView(TokenRequiredMixin, View):
    """
    Base das views da API de boards

    Autenticação por token Bearer (sem sessão, sem CSRF); erros dos
    serviços viram envelope JSON no ApiExceptionMiddleware.
    """

    service = board_service

    def http_method_not_allowed(self, request, *args, **kwargs):
        return method_not_allowed(self._allowed_methods())


class BoardCollectionView(ApiView):
    """GET /boards e POST /boards"""

    def get(self, request):
        boards = self.service.list_boards(request.user_id)

        return JsonResponse({
            'success': True,
            'boards': [board.as_dict(todos=board.todo_list) for board in boards],
        })

    def post(self, request):
        data = parse_json_body(request)

        board, todo = self.service.create_board(
            request.user_id, data.get('board_name'), data.get('todo_title')
        )

        return JsonResponse({
            'success': True,
            'message': 'Board created successfully',
            'board': board.as_dict(todos=[todo]),
        }, status=201)


class BoardDetailView(ApiView):
    """PUT /boards/<id> e DELETE /boards/<id>"""

    def put(self, request, board_id):
        data = parse_json_body(request)

        board = self.service.rename_board(request.user_id, board_id, data.get('board_name'))

        return JsonResponse({
            'success': True,
            'message': 'Board updated successfully',
            'board': board.as_dict(),
        })

    def delete(self, request, board_id):
        self.service.delete_board(request.user_id, board_id)

        return JsonResponse({
            'success': True,
            'message': 'Board deleted successfully',
        })


class BoardCompletionView(ApiView):
    """PATCH /boards/<id>/complete - marcação manual"""

    def patch(self, request, board_id):
        data = parse_json_body(request)

        board = self.service.set_board_completion(
            request.user_id, board_id, data.get('is_completed')
        )

        return JsonResponse({
            'success': True,
            'message': 'Board completion status updated',
            'board': board.as_dict(),
        })


class TodoCollectionView(ApiView):
    """POST /todos"""

    def post(self, request):
        data = parse_json_body(request)

        todo = self.service.create_todo(
            request.user_id, data.get('board_id'), data.get('todo_title')
        )

        return JsonResponse({
            'success': True,
            'message': 'Todo created successfully',
            'todo': todo.as_dict(),
        }, status=201)


class TodoDetailView(ApiView):
    """PUT /todos/<id> e DELETE /todos/<id>"""

    def put(self, request, todo_id):
        data = parse_json_body(request)

        todo = self.service.rename_todo(request.user_id, todo_id, data.get('todo_title'))

        return JsonResponse({
            'success': True,
            'message': 'Todo updated successfully',
            'todo': todo.as_dict(),
        })

    def delete(self, request, todo_id):
        self.service.delete_todo(request.user_id, todo_id)

        return JsonResponse({
            'success': True,
            'message': 'Todo deleted successfully',
        })


class TodoCompletionView(ApiView):
    """PATCH /todos/<id>/complete - recalcula o board"""

    def patch(self, request, todo_id):
        data = parse_json_body(request)

        todo, board_completed = self.service.set_todo_completion(
            request.user_id, todo_id, data.get('is_completed')
        )

        return JsonResponse({
            'success': True,
            'message': 'Todo completion status updated',
            'todo': todo.as_dict(),
            'boardCompleted': board_completed,
        })
