# apps/core/models.py

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """
    Manager de usuários identificados por email

    O email é gravado exatamente como informado (sem normalizar o domínio),
    então a unicidade é sensível a maiúsculas/minúsculas.
    """

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('O email é obrigatório')
        user = self.model(email=email.strip(), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superusuário precisa de is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superusuário precisa de is_superuser=True')

        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Modelo de usuário do Task Board

    Login por email; o nome é apenas para exibição. A senha fica no hash do
    Django e nunca é serializada pela API.
    """

    # Campos do AbstractUser que não usamos
    username = None
    first_name = None
    last_name = None
    date_joined = None

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)

    # === METADADOS ===
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    def as_public_dict(self):
        """Campos públicos devolvidos no registro e no login"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
        }

    def __str__(self):
        return f"{self.name} <{self.email}>"
