from apps.core.serializers import isoformat


def serialize_timesheet(timesheet, projects=None, tasks=None):
    """
    projects / tasks: słowniki {id: obiekt} pobrane zawczasu.
    Projekt lub zadanie mogło zostać usunięte, wtedy zostaje samo ID.
    """
    project = (projects or {}).get(timesheet.project_id)
    task = (tasks or {}).get(timesheet.task_id)
    return {
        'id': timesheet.id,
        'user': timesheet.user_id,
        'project': (
            {'id': project.id, 'title': project.title, 'key': project.key}
            if project else timesheet.project_id
        ),
        'task': (
            {'id': task.id, 'title': task.title, 'status': task.status}
            if task else timesheet.task_id
        ),
        'date': isoformat(timesheet.date),
        'hours': timesheet.hours,
        'description': timesheet.description,
        'billable': timesheet.billable,
        'status': timesheet.status,
        'approved_by': timesheet.approved_by_id,
        'created_at': isoformat(timesheet.created_at),
    }
