from apps.core.serializers import isoformat, serialize_user_brief


def serialize_project(project, detail=False):
    data = {
        'id': project.id,
        'title': project.title,
        'description': project.description,
        'key': project.key,
        'status': project.status,
        'priority': project.priority,
        'start_date': isoformat(project.start_date),
        'end_date': isoformat(project.end_date),
        'budget': float(project.budget) if project.budget is not None else None,
        'manager': serialize_user_brief(project.manager),
        'organization': project.organization_id,
        'category': project.category,
        'tags': project.tags,
        'created_at': isoformat(project.created_at),
    }
    if detail:
        data['members'] = [serialize_user_brief(u) for u in project.members.all()]
    else:
        data['members'] = [u.id for u in project.members.all()]
    return data
