# config/settings/development.py

from .base import *

# === DESENVOLVIMENTO ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# === BANCO DE DADOS ===

# PostgreSQL por padrão (mesmo do production)
# Usar DATABASE_URL se fornecida, senão usar variáveis individuais
if env('DATABASE_URL', default=None):
    import dj_database_url

    DATABASES['default'] = dj_database_url.parse(env('DATABASE_URL'), conn_max_age=600)
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': env('DB_NAME', default='taskboard'),
            'USER': env('DB_USER', default='taskboard_user'),
            'PASSWORD': env('DB_PASSWORD', default='taskboard123'),
            'HOST': env('DB_HOST', default='localhost'),
            'PORT': env('DB_PORT', default='5432'),
            'OPTIONS': {
                'sslmode': 'prefer',  # Mais flexível que 'require'
            },
            'CONN_MAX_AGE': 60,  # Conexões persistentes
        }
    }

# Fallback para SQLite apenas se explicitamente solicitado
if env('USE_SQLITE', cast=bool, default=False):
    print("🔄 Usando SQLite para desenvolvimento")
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }
else:
    print(f"🐘 Usando PostgreSQL: {DATABASES['default']['NAME']}@{DATABASES['default']['HOST']}")

# === LOGGING MAIS VERBOSO ===

LOGGING['handlers']['console']['level'] = 'DEBUG'
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['apps']['level'] = 'DEBUG'

LOGGING['loggers']['django.db.backends'] = {
    'handlers': ['console'],
    'level': 'DEBUG',
    'propagate': False,
}

# === CONFIGURAÇÕES DE DESENVOLVIMENTO ===

# Cache simples em desenvolvimento (sem Redis obrigatório)
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'taskboard-dev-cache',
    }
}

# Usar Redis se disponível
if env('REDIS_URL', default=None):
    try:
        import redis

        # Testar conexão Redis
        r = redis.from_url(env('REDIS_URL'))
        r.ping()

        CACHES['default'] = {
            'BACKEND': 'django_redis.cache.RedisCache',
            'LOCATION': env('REDIS_URL'),
            'OPTIONS': {
                'CLIENT_CLASS': 'django_redis.client.DefaultClient',
            }
        }
        print("🔴 Redis conectado com sucesso!")
    except redis.RedisError as e:
        print(f"⚠️  Redis não disponível: {e}")
        print("📝 Usando cache em memória local")

# Arquivos estáticos sem manifest em desenvolvimento
STORAGES['staticfiles'] = {
    'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
}

# Configurações mais relaxadas para desenvolvimento
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# Configurações do shell_plus
SHELL_PLUS_IMPORTS = [
    'from apps.core.models import *',
    'from apps.board.models import *',
    'from apps.board.services import board_service',
    'from apps.core.auth_service import auth_service',
]

print("🚀 Configurações de DESENVOLVIMENTO carregadas")
print(f"📁 BASE_DIR: {BASE_DIR}")
print(f"🔑 DEBUG: {DEBUG}")
print(f"🌐 ALLOWED_HOSTS: {ALLOWED_HOSTS}")
