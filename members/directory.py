from members.exceptions import MemberNotFound
from members.models import Member


def find_member_by_id(member_id) -> Member:
    try:
        return Member.objects.get(pk=member_id)
    except Member.DoesNotExist:
        raise MemberNotFound()
