"""Base schema configuration for all Pydantic models.

This module provides centralized base classes with consistent configuration.
All API schemas should inherit from the appropriate base class.

Usage:
    - APIRequest: For incoming API request bodies
    - APIResponse: For outgoing API response bodies

Field names travel on the wire in snake_case (``photo_url``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming API request schemas.

    Configured to ignore extra fields - clients may send additional
    properties (``id``, ``created``, ...) that are never client-settable.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class APIResponse(_BaseSchema):
    """Base class for outgoing API response schemas.

    Configured to forbid extra fields - we should only return
    properties that are explicitly defined in the schema.
    """

    model_config = ConfigDict(
        extra="forbid",
    )
