from rest_framework import serializers

from cocktails.models import image_url
from cocktails.serializers import CocktailSummarySerializer, UnitSerializer
from customs.models import Custom, CustomIngredient
from members.serializers import UserSerializer


class CustomIngredientSerializer(serializers.Serializer):
    ingredient_id = serializers.IntegerField(min_value=1)
    unit_id = serializers.IntegerField(min_value=1)
    amount = serializers.FloatField()

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be positive.')
        return value


class CustomModifySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    comment = serializers.CharField(allow_blank=True, required=False)
    recipe = serializers.CharField(allow_blank=True, required=False)
    summary = serializers.CharField(max_length=255, allow_blank=True, required=False)
    open = serializers.BooleanField(required=False)
    ingredients = CustomIngredientSerializer(many=True, allow_empty=False)


class CustomCreateSerializer(CustomModifySerializer):
    cocktail_id = serializers.IntegerField(min_value=1)
    comment = serializers.CharField(allow_blank=True, default='')
    recipe = serializers.CharField(allow_blank=True, default='')
    summary = serializers.CharField(max_length=255, allow_blank=True, default='')
    open = serializers.BooleanField(default=True)


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.ImageField(required=False, allow_null=True)


class CustomCocktailSerializer(serializers.ModelSerializer):
    user = UserSerializer(source='member', read_only=True)

    class Meta:
        model = Custom
        fields = ['id', 'image', 'name', 'summary', 'user']


class CustomIngredientDetailSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='ingredient.id', read_only=True)
    name = serializers.CharField(source='ingredient.name', read_only=True)
    image = serializers.SerializerMethodField()
    unit = UnitSerializer(read_only=True)

    class Meta:
        model = CustomIngredient
        fields = ['id', 'name', 'image', 'amount', 'unit']

    def get_image(self, obj):
        return image_url(obj.ingredient.image)


class CustomDetailSerializer(serializers.ModelSerializer):
    user = UserSerializer(source='member', read_only=True)
    cocktail = CocktailSummarySerializer(read_only=True)
    custom_ingredients = serializers.SerializerMethodField()

    class Meta:
        model = Custom
        fields = [
            'id', 'name', 'comment', 'recipe', 'summary', 'open', 'image',
            'created', 'updated', 'user', 'cocktail', 'custom_ingredients',
        ]

    def get_custom_ingredients(self, obj):
        rows = self.context.get('custom_ingredients')
        if rows is None:
            rows = obj.custom_ingredients.select_related('ingredient', 'unit').order_by('id')
        return CustomIngredientDetailSerializer(rows, many=True).data
