import json
from collections.abc import Mapping

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from customs.serializers import ImageUploadSerializer
from customs.service import CustomService


def _custom_payload(request):
    """The recipe fields, sent either as a JSON body or as a ``custom`` JSON part."""
    data = request.data
    if not isinstance(data, Mapping):
        return data
    raw = data.get('custom')
    if raw is None:
        return {k: v for k, v in data.items() if k != 'image'}
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError:
            raise ParseError("The 'custom' part must be a JSON object.")
    return raw


def _uploaded_image(request):
    serializer = ImageUploadSerializer(data={'image': request.FILES.get('image')})
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data.get('image')


class CustomServiceMixin:
    service_class = CustomService

    def get_service(self) -> CustomService:
        return self.service_class()


class CustomCreateView(CustomServiceMixin, APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request, format=None):
        image = _uploaded_image(request)
        custom_id = self.get_service().create_custom_cocktail(image, _custom_payload(request), request.user.id)
        return Response({'id': custom_id}, status=status.HTTP_201_CREATED)


class CustomListView(CustomServiceMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, cocktail_id, format=None):
        try:
            page = int(request.query_params.get('page', 1))
            size = int(request.query_params.get('size', settings.CUSTOM_PAGE_SIZE))
        except ValueError:
            return Response({'detail': "Invalid integer value for 'page' or 'size'."}, status=status.HTTP_400_BAD_REQUEST)
        if page < 1 or size < 1:
            return Response({'detail': "'page' and 'size' must be positive."}, status=status.HTTP_400_BAD_REQUEST)
        size = min(size, settings.CUSTOM_MAX_PAGE_SIZE)
        data = self.get_service().get_custom_list(request.user.id, cocktail_id, page=page, size=size)
        return Response(data)


class CustomDetailView(CustomServiceMixin, APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request, pk, format=None):
        return Response(self.get_service().find_custom(request.user.id, pk))

    def patch(self, request, pk, format=None):
        image = _uploaded_image(request)
        self.get_service().modify_custom_cocktail(request.user.id, pk, image, _custom_payload(request))
        return Response(status=status.HTTP_204_NO_CONTENT)

    def delete(self, request, pk, format=None):
        self.get_service().delete_custom_cocktail(request.user.id, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CustomIdListView(CustomServiceMixin, APIView):
    permission_classes = [IsAdminUser]

    def get(self, request, format=None):
        return Response({'results': self.get_service().find_all_custom_id_list()})
