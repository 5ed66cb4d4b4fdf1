from rest_framework import serializers


class CustomerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    remark = serializers.CharField(required=False, allow_blank=True)
