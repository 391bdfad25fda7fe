# config/wsgi.py

"""
Ponto de entrada WSGI do Task Board

Usado pelo servidor de aplicação em produção, ex:
    gunicorn config.wsgi:application
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.production')

application = get_wsgi_application()
