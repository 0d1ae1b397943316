"""Ownership rules for changing a custom cocktail.

``check_custom_permission`` runs at the top of every protected service
operation, before anything is written.
"""
from __future__ import annotations

import logging

from members.exceptions import Forbidden
from members.models import Member
from customs.models import Custom
from customs.store import CustomStore

logger = logging.getLogger(__name__)


def is_privileged(user_id) -> bool:
    if user_id is None:
        return False
    return Member.objects.filter(pk=user_id, is_staff=True).exists()


def is_owner_or_privileged(user_id, custom: Custom) -> bool:
    return custom.member_id == user_id or is_privileged(user_id)


def has_custom_permission(user_id, custom_id) -> bool:
    if user_id is None:
        return False
    if is_privileged(user_id):
        return True
    owner_id = CustomStore().find_owner_id(custom_id)
    # unknown ids pass through; the operation itself reports the missing recipe
    if owner_id is None:
        return True
    return owner_id == user_id


def check_custom_permission(user_id, custom_id) -> None:
    if not has_custom_permission(user_id, custom_id):
        logger.info("Member %s denied access to custom cocktail %s", user_id, custom_id)
        raise Forbidden()
