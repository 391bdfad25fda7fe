# apps/core/forms.py

from django import forms
from django.conf import settings


class TextOnlyMixin:
    """
    Campos de texto vindos de JSON: só aceitam string

    O CharField do Django converteria {"x": 1} ou ["a"] com str(); aqui
    isso é erro 'invalid' do próprio campo.
    """

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class TextField(TextOnlyMixin, forms.CharField):
    default_error_messages = {
        'invalid': 'Must be a string',
    }


class EmailTextField(TextOnlyMixin, forms.EmailField):
    pass


class RegisterForm(forms.Form):
    """Validação do registro de usuário"""

    name = TextField(
        max_length=255,
        error_messages={
            'required': 'Name is required',
            'invalid': 'Name must be a string',
        }
    )

    email = EmailTextField(
        max_length=255,
        error_messages={
            'required': 'Please enter a valid email',
            'invalid': 'Please enter a valid email',
        }
    )

    password = TextField(
        strip=False,
        error_messages={
            'required': 'Password is required',
            'invalid': 'Password must be a string',
        }
    )

    def clean_password(self):
        password = self.cleaned_data['password']
        min_length = settings.TASKBOARD_PASSWORD_MIN_LENGTH

        if len(password) < min_length:
            raise forms.ValidationError(
                f'Password must be at least {min_length} characters'
            )

        return password


class LoginForm(forms.Form):
    """Formulário de login por email"""

    email = EmailTextField(
        max_length=255,
        error_messages={
            'required': 'Please enter a valid email',
            'invalid': 'Please enter a valid email',
        }
    )

    password = TextField(
        strip=False,
        error_messages={
            'required': 'Password is required',
            'invalid': 'Password must be a string',
        }
    )
