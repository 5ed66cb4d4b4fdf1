from rest_framework import serializers

from .domain import OrderType
from .workflow import ITEM_FIELDS


class OrderHeaderSerializer(serializers.Serializer):
    order_type = serializers.ChoiceField(choices=[t.value for t in OrderType], required=False)
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    remark = serializers.CharField(required=False, allow_blank=True)


class ItemFieldSerializer(serializers.Serializer):
    field = serializers.ChoiceField(choices=ITEM_FIELDS)
    value = serializers.CharField(allow_blank=True, allow_null=True, trim_whitespace=False)


class SubmitSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(default=False)


class StatusUpdateSerializer(serializers.Serializer):
    is_paid = serializers.BooleanField(required=False, allow_null=True, default=None)
    is_completed = serializers.BooleanField(required=False, allow_null=True, default=None)
    remark = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


class OrderFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=[t.value for t in OrderType], required=False)
    paid = serializers.ChoiceField(choices=['true', 'false'], required=False)
    completed = serializers.ChoiceField(choices=['true', 'false'], required=False)
    customer_name = serializers.CharField(required=False, allow_blank=True)
    order_number = serializers.CharField(required=False, allow_blank=True)
