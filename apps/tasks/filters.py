import django_filters
from .models import Task


class TaskFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr='icontains')
    status = django_filters.ChoiceFilter(choices=Task.StatusChoices.choices)
    priority = django_filters.ChoiceFilter(choices=Task.Priority.choices)
    type = django_filters.ChoiceFilter(choices=Task.Type.choices)
    project = django_filters.NumberFilter(field_name='project_id')
    milestone = django_filters.NumberFilter(field_name='milestone_id')
    parent_task = django_filters.NumberFilter(field_name='parent_task_id')
    assignee = django_filters.NumberFilter(field_name='assignees', distinct=True)

    class Meta:
        model = Task
        fields = ['title', 'status', 'priority', 'type', 'project', 'milestone', 'parent_task', 'assignee']
