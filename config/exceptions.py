from rest_framework.views import exception_handler as drf_exception_handler


def exception_handler(exc, context):
    """DRF's handler, plus the error kind as ``code`` on single-message bodies."""
    response = drf_exception_handler(exc, context)
    if response is None:
        return response
    if isinstance(response.data, dict) and 'detail' in response.data:
        code = getattr(response.data['detail'], 'code', None)
        if code:
            response.data['code'] = code
    return response
