"""Base model and shared field types for token records.

Every record inherits from :class:`TokenBaseModel` which provides:

* ``frozen=True`` so a decoded token is a plain immutable value.
* ``populate_by_name=True`` so records can be built from either the
  Python field names or the stable wire aliases.
* ``extra="ignore"`` so keys added by a newer issuer do not break an
  older verifier.
"""

from __future__ import annotations

import time
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from sessiontoken._constants import INT64_MAX, INT64_MIN

Int64 = Annotated[StrictInt, Field(ge=INT64_MIN, le=INT64_MAX)]
"""Strict signed 64-bit integer; floats and numeric strings are rejected."""


def unix_now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


class TokenBaseModel(BaseModel):
    """Base for wire records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, object]:
        """Return the record keyed by wire names, in declaration order."""
        return self.model_dump(mode="json", by_alias=True)
