from rest_framework import serializers


class EmployeeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    hire_date = serializers.DateField(required=False, allow_null=True)


class LeaveSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    reason = serializers.CharField(required=False, allow_blank=True)

    def validate(self, data):
        if data['end_date'] < data['start_date']:
            raise serializers.ValidationError('End date cannot be before start date.')
        return data


class OvertimeSerializer(serializers.Serializer):
    employee_id = serializers.IntegerField()
    overtime_date = serializers.DateField()
    hours = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0)
    reason = serializers.CharField(required=False, allow_blank=True)


class OvertimeReportSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class ApprovalSerializer(serializers.Serializer):
    approved = serializers.BooleanField()
