"""Base Pydantic models for the apidef SDK.

This module provides the base model class that all SDK Pydantic models should inherit from.
It establishes consistent configuration across all models including:

- Strict field validation (no extra fields allowed)
- Immutable instances, so registered types and declared parameters
  can be shared between request handlers without copying

Example:
    >>> from apidef.sdk.models import SdkBaseModel
    >>> from pydantic import Field
    >>>
    >>> class MyModel(SdkBaseModel):
    ...     name: str
    ...     count: int = Field(default=0, ge=0)
    >>>
    >>> instance = MyModel(name="test")
    >>> instance.model_dump()
    {'name': 'test', 'count': 0}
"""

from pydantic import BaseModel, ConfigDict


class SdkBaseModel(BaseModel):
    """Base model for all apidef SDK Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable once created
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
