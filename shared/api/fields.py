"""Serializer fields normalizing absent values at the API boundary."""

from __future__ import annotations

import re

from rest_framework import serializers  # type: ignore
from rest_framework.fields import empty  # type: ignore


_CAMEL_BOUNDARY = re.compile(r"_([a-z])")


def to_camel(name: str) -> str:
    """``return_date`` -> ``returnDate``; DRF's ``non_field_errors`` is kept."""
    if name in ("non_field_errors", "__all__"):
        return "non_field_errors"
    return _CAMEL_BOUNDARY.sub(lambda match: match.group(1).upper(), name)


class BlankAsNullMixin:
    """Blank or whitespace-only strings are stored as ``None``."""

    def run_validation(self, data=empty):  # type: ignore
        if isinstance(data, str) and not data.strip():
            return None
        return super().run_validation(data)  # type: ignore[misc]


class NullableCharField(BlankAsNullMixin, serializers.CharField):
    def __init__(self, **kwargs):  # type: ignore
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("allow_blank", True)
        super().__init__(**kwargs)


class NullableEmailField(BlankAsNullMixin, serializers.EmailField):
    def __init__(self, **kwargs):  # type: ignore
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_null", True)
        kwargs.setdefault("allow_blank", True)
        super().__init__(**kwargs)
