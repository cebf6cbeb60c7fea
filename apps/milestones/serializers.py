from apps.core.serializers import isoformat


def serialize_milestone(milestone, project_title=None):
    data = {
        'id': milestone.id,
        'title': milestone.title,
        'description': milestone.description,
        'project': milestone.project_id,
        'due_date': isoformat(milestone.due_date),
        'status': milestone.status,
        'created_at': isoformat(milestone.created_at),
    }
    if project_title is not None:
        data['project'] = {'id': milestone.project_id, 'title': project_title}
    return data
