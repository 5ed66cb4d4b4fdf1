from rest_framework import serializers


class InventoryFilterSerializer(serializers.Serializer):
    material = serializers.CharField(required=False, allow_blank=True)
    specification = serializers.CharField(required=False, allow_blank=True)
    low_stock = serializers.ChoiceField(choices=['true', 'false'], required=False)


class InventoryItemSerializer(serializers.Serializer):
    material = serializers.CharField(max_length=50)
    specification = serializers.CharField(max_length=100)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    density = serializers.DecimalField(max_digits=10, decimal_places=4, required=False, allow_null=True)


class InventoryUpdateSerializer(serializers.Serializer):
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    density = serializers.DecimalField(max_digits=10, decimal_places=4, required=False, allow_null=True)


class InventoryImportSerializer(serializers.Serializer):
    file = serializers.FileField()

    def validate_file(self, value):
        if not value.name.lower().endswith('.xlsx'):
            raise serializers.ValidationError('Please upload an .xlsx file.')
        return value
