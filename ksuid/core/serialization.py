"""pydantic integration: KSUIDs travel as base62 strings.

Only imported when pydantic builds a schema for a model field typed as
Ksuid or KsuidMs, so pydantic stays an optional dependency.
"""

from pydantic_core import core_schema

from ksuid.core.identifier import STRING_LENGTH


def _to_base62(value):
    return value.to_base62()


def ksuid_core_schema(cls):
    """Schema that validates via cls.from_base62 and serializes via to_base62."""
    from_string = core_schema.chain_schema([
        core_schema.str_schema(min_length=STRING_LENGTH, max_length=STRING_LENGTH),
        core_schema.no_info_plain_validator_function(cls.from_base62),
    ])
    return core_schema.json_or_python_schema(
        json_schema=from_string,
        python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_string]),
        serialization=core_schema.plain_serializer_function_ser_schema(
            _to_base62, return_schema=core_schema.str_schema()),
    )
