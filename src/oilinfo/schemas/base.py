"""Base schema configuration for all Pydantic models.

Usage:
    - APIResponse: For outgoing API response bodies (camelCase on the wire)
    - DownstreamResponse: For payloads received from external providers
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase
        use_enum_values=True,
        validate_default=True,
        serialize_by_alias=True,
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields - we should only return
    properties that are explicitly defined in the schema.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


class DownstreamResponse(BaseModel):
    """Base class for payloads received from external providers.

    Provider field names are kept verbatim and unknown properties are
    ignored so new upstream fields never break parsing.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )
