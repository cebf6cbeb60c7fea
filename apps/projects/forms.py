# apps/projects/forms.py
from django import forms
from django.contrib.auth import get_user_model
from .models import Project


PROJECT_FIELDS = [
    'title', 'description', 'key', 'status', 'priority', 'start_date',
    'end_date', 'budget', 'members', 'category', 'tags',
]


class ProjectForm(forms.ModelForm):
    class Meta:
        model = Project
        fields = PROJECT_FIELDS

    def __init__(self, *args, organization=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Członkami mogą być tylko użytkownicy z tej samej organizacji
        self.fields['members'].queryset = get_user_model().objects.filter(organization=organization)

    def clean_tags(self):
        tags = self.cleaned_data.get('tags') or []
        if not isinstance(tags, list):
            raise forms.ValidationError("Tags must be a list")
        return [str(t).strip() for t in tags if str(t).strip()]

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get('start_date'), cleaned.get('end_date')
        if start and end and end < start:
            raise forms.ValidationError("End date cannot be before start date")
        return cleaned
