from rest_framework import serializers


def validate_date_order(attrs, instance=None):
    """
    Reject a start date later than the end date.

    Dates missing from ``attrs`` fall back to the instance's stored values, so a
    partial update can't slip an inverted range past the check.
    """
    start = attrs['start_date'] if 'start_date' in attrs else getattr(instance, 'start_date', None)
    end = attrs['end_date'] if 'end_date' in attrs else getattr(instance, 'end_date', None)
    if start and end and start > end:
        raise serializers.ValidationError({'startDate': 'Start date cannot be later than end date'})
