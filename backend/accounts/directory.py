"""
User directory lookups.

Task responses reference users by id; the read side expands those ids
into small profile summaries through the functions here.
"""

from typing import Dict, Iterable

from .models import User


def user_summary(user: User) -> Dict:
    """Return the public profile summary for a user."""
    return {
        'id': user.pk,
        'name': user.display_name,
        'email': user.email,
        'profileImageUrl': user.profile_image_url,
    }


def user_summaries(user_ids: Iterable[int]) -> Dict[int, Dict]:
    """
    Look up profile summaries for a batch of user ids in one query.

    Unknown ids are simply absent from the result.
    """
    ids = set(user_ids)
    if not ids:
        return {}
    users = User.objects.filter(pk__in=ids).only(
        'id', 'username', 'name', 'email', 'profile_image_url'
    )
    return {user.pk: user_summary(user) for user in users}


def existing_user_ids(user_ids: Iterable[int]) -> set:
    """Return the subset of ids that belong to active users."""
    ids = set(user_ids)
    if not ids:
        return set()
    return set(
        User.objects.filter(pk__in=ids, is_active=True).values_list('pk', flat=True)
    )
