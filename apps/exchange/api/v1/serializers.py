"""
Serializers for the exchange bounded context.
Validate query parameters before they reach the conversion engine.
"""

from rest_framework import serializers


class ConversionQuerySerializer(serializers.Serializer):
    source_currency = serializers.CharField(max_length=3, min_length=3)
    exchanged_currency = serializers.CharField(max_length=3, min_length=3)
    amount = serializers.DecimalField(max_digits=18, decimal_places=6)

    def validate_source_currency(self, value: str) -> str:
        return value.upper()

    def validate_exchanged_currency(self, value: str) -> str:
        return value.upper()


class CachePairQuerySerializer(serializers.Serializer):
    source_currency = serializers.CharField(max_length=3, min_length=3, required=False)
    exchanged_currency = serializers.CharField(max_length=3, min_length=3, required=False)

    def validate(self, attrs):
        given = [key for key in ("source_currency", "exchanged_currency") if key in attrs]
        if len(given) == 1:
            raise serializers.ValidationError(
                "source_currency and exchanged_currency must be given together"
            )
        return {key: value.upper() for key, value in attrs.items()}
