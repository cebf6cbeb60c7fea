# apps/tasks/forms.py
from django import forms
from django.contrib.auth import get_user_model
from apps.milestones.models import Milestone
from .models import Task, TaskComment

TASK_FIELDS = [
    'title', 'description', 'status', 'priority', 'type', 'due_date',
    'estimated_hours', 'actual_hours', 'milestone', 'parent_task',
    'dependencies', 'assignees', 'tags', 'order',
]

# Pola formularza -> atrybuty TaskEntity (relacje jako ID)
ENTITY_ATTRS = {
    'milestone': 'milestone_id',
    'parent_task': 'parent_task_id',
    'assignees': 'assignee_ids',
    'dependencies': 'dependency_ids',
}


class TaskForm(forms.ModelForm):
    class Meta:
        model = Task
        fields = TASK_FIELDS

    def __init__(self, *args, organization=None, only=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Częściowy PUT: walidujemy tylko przysłane pola (zapisane FK mogą wskazywać na usunięte wiersze)
        if only is not None:
            for name in set(self.fields) - set(only):
                del self.fields[name]
        # Wszystkie relacje ograniczone do organizacji użytkownika
        org_tasks = Task.objects.filter(project__organization=organization)
        querysets = {
            'assignees': get_user_model().objects.filter(organization=organization),
            'milestone': Milestone.objects.filter(project__organization=organization),
            'parent_task': org_tasks,
            'dependencies': org_tasks,
        }
        for name, queryset in querysets.items():
            if name in self.fields:
                self.fields[name].queryset = queryset

    def clean_tags(self):
        tags = self.cleaned_data.get('tags') or []
        if not isinstance(tags, list):
            raise forms.ValidationError("Tags must be a list")
        return [str(t).strip() for t in tags if str(t).strip()]

    def clean(self):
        cleaned = super().clean()
        if self.instance.pk:
            parent = cleaned.get('parent_task')
            if parent is not None and parent.pk == self.instance.pk:
                raise forms.ValidationError("A task cannot be its own parent")
            dependencies = cleaned.get('dependencies') or []
            if any(t.pk == self.instance.pk for t in dependencies):
                raise forms.ValidationError("A task cannot depend on itself")
        return cleaned

    def entity_changes(self, keys=None):
        """
        cleaned_data w postaci atrybutów encji domenowej.
        keys: ograniczenie do pól faktycznie przysłanych w body.
        """
        changes = {}
        for name in TASK_FIELDS:
            if keys is not None and name not in keys:
                continue
            value = self.cleaned_data.get(name)
            if name in ('milestone', 'parent_task'):
                value = value.pk if value is not None else None
            elif name in ('assignees', 'dependencies'):
                value = sorted(obj.pk for obj in value or [])
            elif name == 'description':
                value = value or ""
            changes[ENTITY_ATTRS.get(name, name)] = value
        return changes


class CommentForm(forms.ModelForm):
    class Meta:
        model = TaskComment
        fields = ['text', 'parent_comment', 'mentions']

    def __init__(self, *args, task=None, organization=None, **kwargs):
        super().__init__(*args, **kwargs)
        # Odpowiadać można tylko na komentarze tego samego zadania
        self.fields['parent_comment'].queryset = TaskComment.objects.filter(task=task)
        self.fields['mentions'].queryset = get_user_model().objects.filter(organization=organization)

    def clean_text(self):
        text = self.cleaned_data['text'].strip()
        if not text:
            raise forms.ValidationError("Comment text cannot be empty")
        return text
