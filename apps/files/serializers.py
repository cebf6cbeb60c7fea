from apps.core.serializers import isoformat, serialize_user_brief


def serialize_file(f):
    return {
        'id': f.id,
        'name': f.name,
        'url': f.url,
        'project': f.project_id,
        'uploaded_by': serialize_user_brief(f.uploaded_by),
        'size': f.size,
        'type': f.type,
        'created_at': isoformat(f.created_at),
    }
