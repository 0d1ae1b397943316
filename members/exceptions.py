from rest_framework.exceptions import NotFound, PermissionDenied


class MemberNotFound(NotFound):
    default_detail = 'Member not found.'
    default_code = 'FAIL_TO_FIND_MEMBER'


class Forbidden(PermissionDenied):
    default_detail = 'You do not have permission to change this resource.'
    default_code = 'FORBIDDEN'
