"""Query Method Model Classes

Pydantic models for the JSON documents returned by module query methods.
A failed method returns exactly {"success": false}.
"""

import json
from typing import List, Optional

from pydantic import BaseModel, Field


class QueryMethodResponse(BaseModel):
    """Base model for query method responses."""
    success: bool = Field(..., description="Whether the query succeeded")

    def to_json(self) -> str:
        """Serialize without unset optional fields so failures carry no data key."""
        return json.dumps(self.model_dump(exclude_none=True))


class SourceEntry(BaseModel):
    """A data source available in the triple store."""
    uri: str = Field(..., description="Data source URI")
    label: str = Field(..., description="Human readable label")


class SourceListResponse(QueryMethodResponse):
    """Response model for data source listings."""
    data: Optional[List[SourceEntry]] = Field(None, description="Data sources, absent on failure")


class InstanceCount(BaseModel):
    """Number of instances of one class."""
    type: str = Field(..., description="Class URI")
    label: str = Field(..., description="Class label")
    count: int = Field(..., description="Number of distinct instances")


class InstanceCountResponse(QueryMethodResponse):
    """Response model for count style queries."""
    data: Optional[List[InstanceCount]] = Field(None, description="Counts per class, absent on failure")


FAILURE = QueryMethodResponse(success=False)
