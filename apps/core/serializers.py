# apps/core/serializers.py


def isoformat(value):
    return value.isoformat() if value else None


def serialize_user_brief(user):
    if user is None:
        return None
    return {'id': user.id, 'name': user.name, 'avatar': user.avatar}


def serialize_user(user):
    return {
        'id': user.id,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'avatar': user.avatar,
        'organization': user.organization_id,
    }


def serialize_organization(org):
    if org is None:
        return None
    return {
        'id': org.id,
        'name': org.name,
        'owner': org.owner_id,
        'domain': org.domain,
        'address': org.address,
        'website': org.website,
        'subscription': {
            'plan': org.plan,
            'status': org.subscription_status,
            'start_date': isoformat(org.subscription_start),
            'end_date': isoformat(org.subscription_end),
        },
        'settings': {
            'allow_time_tracking': org.allow_time_tracking,
            'default_currency': org.default_currency,
        },
        'created_at': isoformat(org.created_at),
    }
