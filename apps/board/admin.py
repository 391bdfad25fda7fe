# apps/board/admin.py

from django.contrib import admin
from django.db.models import Count, Q
from django.utils.html import format_html

from .models import Board, Todo


class TodoInline(admin.TabularInline):
    """Todos editáveis dentro do board"""

    model = Todo
    extra = 0
    fields = ['todo_title', 'is_completed', 'created_at', 'updated_at']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['created_at', 'id']


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin para boards com progresso dos todos"""

    list_display = ['board_name', 'user', 'status_badge', 'progresso', 'created_at']
    list_filter = ['is_completed', 'created_at']
    search_fields = ['board_name', 'user__email', 'user__name']
    list_select_related = ['user']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [TodoInline]
    actions = ['recalcular_conclusao']

    def get_readonly_fields(self, request, obj=None):
        # Dono do board é imutável depois de criado
        if obj is not None:
            return self.readonly_fields + ['user']
        return self.readonly_fields

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _total=Count('todos'),
            _concluidos=Count('todos', filter=Q(todos__is_completed=True)),
        )

    def status_badge(self, obj):
        """Exibe a conclusão com badge colorido"""
        if obj.is_completed:
            cor, texto = '#10B981', 'Concluído'  # verde
        else:
            cor, texto = '#F59E0B', 'Pendente'  # amarelo
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cor, texto
        )

    status_badge.short_description = 'Status'

    def progresso(self, obj):
        return f"{obj._concluidos}/{obj._total}"

    progresso.short_description = 'Todos concluídos'

    @admin.action(description='Recalcular conclusão a partir dos todos')
    def recalcular_conclusao(self, request, queryset):
        for board in queryset:
            board.recompute_completion()
        self.message_user(request, f'{queryset.count()} board(s) recalculado(s).')

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)

        # Todos alterados pelo inline recalculam o board; sem mudança nos
        # todos, o is_completed do form vale como marcação manual
        if not change or any(formset.has_changed() for formset in formsets):
            form.instance.recompute_completion()


@admin.register(Todo)
class TodoAdmin(admin.ModelAdmin):
    """Admin de todos"""

    list_display = ['todo_title', 'board', 'is_completed', 'created_at']
    list_filter = ['is_completed']
    search_fields = ['todo_title', 'board__board_name']
    list_select_related = ['board']
    readonly_fields = ['board', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        # Todos novos entram pelo inline do board
        return False

    # Toda alteração de todo pelo admin recalcula o board, como na API

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        obj.board.recompute_completion()

    def delete_model(self, request, obj):
        board = obj.board
        super().delete_model(request, obj)
        board.recompute_completion()

    def delete_queryset(self, request, queryset):
        boards = list(Board.objects.filter(todos__in=queryset).distinct())
        super().delete_queryset(request, queryset)
        for board in boards:
            board.recompute_completion()
