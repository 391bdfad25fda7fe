# apps/board/urls.py

from django.urls import path
from . import views

app_name = 'board'

urlpatterns = [
    # Boards
    path('boards', views.BoardCollectionView.as_view(), name='boards'),
    path('boards/<int:board_id>', views.BoardDetailView.as_view(), name='board_detail'),
    path('boards/<int:board_id>/complete', views.BoardCompletionView.as_view(), name='board_complete'),

    # Todos
    path('todos', views.TodoCollectionView.as_view(), name='todos'),
    path('todos/<int:todo_id>', views.TodoDetailView.as_view(), name='todo_detail'),
    path('todos/<int:todo_id>/complete', views.TodoCompletionView.as_view(), name='todo_complete'),
]
