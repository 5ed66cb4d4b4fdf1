from rest_framework import serializers

from .api import SALES_PERIODS, MATERIAL_PRICE_TYPES


class SalesQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=SALES_PERIODS, default='monthly')
    year = serializers.IntegerField(required=False, min_value=2000, max_value=2100)
    quarter = serializers.IntegerField(required=False, min_value=1, max_value=4)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)


class InventoryChartQuerySerializer(serializers.Serializer):
    material = serializers.CharField(required=False, allow_blank=True)
    top = serializers.IntegerField(required=False, min_value=1, max_value=20, default=5)


class MaterialPriceQuerySerializer(serializers.Serializer):
    material = serializers.ChoiceField(choices=MATERIAL_PRICE_TYPES, required=False)
