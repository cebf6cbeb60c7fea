from apps.core.serializers import isoformat, serialize_user_brief


def serialize_history(entry):
    return {
        'id': entry.id,
        'user': entry.user_id,
        'action': entry.action,
        'field': entry.field,
        'old_value': entry.old_value,
        'new_value': entry.new_value,
        'timestamp': isoformat(entry.timestamp),
    }


def serialize_comment(comment):
    return {
        'id': comment.id,
        'user': serialize_user_brief(comment.user),
        'text': comment.text,
        'parent_comment': comment.parent_comment_id,
        'mentions': [u.id for u in comment.mentions.all()],
        'created_at': isoformat(comment.created_at),
    }


def serialize_task(task, detail=False):
    data = {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'project': task.project_id,
        'milestone': task.milestone_id,
        'status': task.status,
        'priority': task.priority,
        'type': task.type,
        'assignees': [serialize_user_brief(u) for u in task.assignees.all()],
        'reporter': serialize_user_brief(task.reporter),
        'due_date': isoformat(task.due_date),
        'estimated_hours': task.estimated_hours,
        'actual_hours': task.actual_hours,
        'parent_task': task.parent_task_id,
        'dependencies': [t.id for t in task.dependencies.all()],
        'tags': task.tags,
        'order': task.order,
        'is_overdue': task.is_overdue,
        'created_at': isoformat(task.created_at),
        'updated_at': isoformat(task.updated_at),
    }
    if detail:
        data['subtasks'] = [
            {'id': t.id, 'title': t.title, 'status': t.status}
            for t in task.subtasks.all()
        ]
        data['history'] = [serialize_history(h) for h in task.history.all()]
        data['comments'] = [serialize_comment(c) for c in task.comments.select_related('user')]
    return data
