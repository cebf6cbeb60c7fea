from django import forms
from django.contrib.auth import get_user_model, password_validation
from django.forms.models import model_to_dict

from .models import Organization, Role

User = get_user_model()


def partial_form_data(instance, payload, fields):
    """
    Dane dla ModelForm przy częściowej aktualizacji (PUT z wybranymi polami):
    obecne wartości instancji nadpisane tym, co przyszło w body.
    """
    data = {}
    for name, value in model_to_dict(instance, fields=fields).items():
        # M2M: model_to_dict zwraca obiekty, formularz oczekuje PK
        if isinstance(value, list) and value and hasattr(value[0], 'pk'):
            value = [obj.pk for obj in value]
        data[name] = value
    data.update({k: v for k, v in payload.items() if k in fields})
    return data


class RegisterForm(forms.Form):
    name = forms.CharField(max_length=150)
    email = forms.EmailField()
    password = forms.CharField(min_length=6)
    organization_name = forms.CharField(max_length=200, required=False)

    def clean_email(self):
        email = self.cleaned_data['email'].lower()
        if User.objects.filter(username=email).exists():
            raise forms.ValidationError("User already exists")
        return email

    def clean_organization_name(self):
        name = self.cleaned_data.get('organization_name', '').strip()
        if name and Organization.objects.filter(name__iexact=name).exists():
            raise forms.ValidationError("Organization already exists")
        return name


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField()


class MemberCreateForm(forms.Form):
    """Admin dodaje użytkownika do swojej organizacji."""
    name = forms.CharField(max_length=150)
    email = forms.EmailField()
    password = forms.CharField()
    role = forms.ChoiceField(choices=Role.choices, required=False)

    def clean_email(self):
        email = self.cleaned_data['email'].lower()
        if User.objects.filter(username=email).exists():
            raise forms.ValidationError("User already exists")
        return email

    def clean_password(self):
        password = self.cleaned_data['password']
        password_validation.validate_password(password)
        return password
