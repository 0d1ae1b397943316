from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError


class CustomNotFound(NotFound):
    default_detail = 'Custom cocktail not found.'
    default_code = 'FAIL_TO_FIND_CUSTOM'


class CustomNotAvailable(PermissionDenied):
    default_detail = 'This custom cocktail is not available.'
    default_code = 'NOT_AVAILABLE'


class ImageRequired(ValidationError):
    default_detail = 'An image is required to create a custom cocktail.'
    default_code = 'IMAGE_REQUIRED'
