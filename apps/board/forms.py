# apps/board/forms.py

from django import forms

from apps.core.forms import TextField


class BoardNameForm(forms.Form):
    """Nome do board (renomear)"""

    board_name = TextField(
        max_length=255,
        error_messages={
            'required': 'Board name is required',
            'invalid': 'Board name must be a string',
        }
    )


class CreateBoardForm(BoardNameForm):
    """Board novo sempre nasce com um primeiro todo"""

    todo_title = TextField(
        max_length=500,
        error_messages={
            'required': 'Initial todo is required',
            'invalid': 'Initial todo must be a string',
        }
    )


class TodoTitleForm(forms.Form):
    """Título do todo (renomear)"""

    todo_title = TextField(
        max_length=500,
        error_messages={
            'required': 'Todo title is required',
            'invalid': 'Todo title must be a string',
        }
    )


class CreateTodoForm(TodoTitleForm):
    """Todo novo dentro de um board existente"""

    board_id = forms.IntegerField(
        min_value=1,
        error_messages={
            'required': 'Board ID is required',
            'invalid': 'Board ID is required',
        }
    )
