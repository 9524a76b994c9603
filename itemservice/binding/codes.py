"""Expansion of short error codes into message code chains."""

from __future__ import annotations

CODE_SEPARATOR = "."


class MessageCodesResolver:
    """Build lookup chains from a short error code, most specific first.

    A field error rejected with ``required`` on field ``itemName`` of object
    ``item`` (type ``str``) resolves to::

        required.item.itemName
        required.itemName
        required.str
        required

    An object error rejected with ``totalPriceMin`` on ``item`` resolves to
    ``totalPriceMin.item`` then ``totalPriceMin``.
    """

    def __init__(self, *, prefix: str = "") -> None:
        self._prefix = prefix

    def _join(self, *parts: str) -> str:
        return self._prefix + CODE_SEPARATOR.join(parts)

    def resolve_object_codes(self, error_code: str, object_name: str) -> tuple[str, ...]:
        return (
            self._join(error_code, object_name),
            self._join(error_code),
        )

    def resolve_field_codes(
        self,
        error_code: str,
        object_name: str,
        field: str,
        field_type: str | None = None,
    ) -> tuple[str, ...]:
        codes = [
            self._join(error_code, object_name, field),
            self._join(error_code, field),
        ]
        if field_type:
            codes.append(self._join(error_code, field_type))
        codes.append(self._join(error_code))
        return tuple(dict.fromkeys(codes))
