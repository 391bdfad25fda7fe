# config/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API JSON
    path('', include('apps.core.urls')),
    path('', include('apps.board.urls')),
]

# Respostas de erro no mesmo envelope JSON da API
handler404 = 'apps.core.views.api_not_found'
handler500 = 'apps.core.views.api_server_error'

# Customizar títulos do admin
admin.site.site_header = 'Task Board Admin'
admin.site.site_title = 'Task Board'
admin.site.index_title = 'Administração do Sistema'
