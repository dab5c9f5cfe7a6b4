"""Shared pydantic base for KITE API models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class KiteModel(BaseModel):
    """Model with camelCase wire names.

    Unknown fields are kept so newer orchestrator versions never break
    parsing, and fields can be set by their Python names as well. Numeric
    gas values are accepted where strings are declared.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict:
        """Serialize for a request body, dropping unset values."""
        return self.model_dump(by_alias=True, exclude_none=True)
