import re

from rest_framework import serializers

from .errors import PASSWORD_STRENGTH_MESSAGE

PASSWORD_RE = re.compile(r'^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$')


def validate_password_strength(password):
    return bool(PASSWORD_RE.match(password or ''))


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(trim_whitespace=False)


class SignupSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(trim_whitespace=False)
    confirm_password = serializers.CharField(trim_whitespace=False)

    def validate(self, attrs):
        if attrs['password'] != attrs['confirm_password']:
            raise serializers.ValidationError({'confirm_password': 'Passwords do not match.'})
        if not validate_password_strength(attrs['password']):
            raise serializers.ValidationError({'password': PASSWORD_STRENGTH_MESSAGE})
        return attrs


class PreferencesSerializer(serializers.Serializer):
    theme = serializers.ChoiceField(choices=['light', 'dark'], required=False)
    language = serializers.ChoiceField(choices=['en', 'zh'], required=False)
