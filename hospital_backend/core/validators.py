from django.core.exceptions import ValidationError


def validate_alphanumeric_name(value: str) -> None:
    """Names must be letters and digits only (no spaces or punctuation)."""
    if value and not value.isalnum():
        raise ValidationError(
            '%(value)s has non-alphanumeric characters.',
            code='non_alphanumeric',
            params={'value': value},
        )


def normalize_tags(value) -> list[str]:
    """Coerce a tag field to a list of trimmed, non-empty strings.

    Accepts a list/tuple of strings or a single comma separated string, the
    two shapes a tag field arrives in from JSON bodies and HTML forms.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValidationError('Expected a list of strings.', code='invalid_tags')

    tags: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError('Expected a list of strings.', code='invalid_tags')
        item = item.strip()
        if item and item not in tags:
            tags.append(item)
    return tags
