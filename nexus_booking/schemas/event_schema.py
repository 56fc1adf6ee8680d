"""Event type data model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventType(BaseModel):
    """A bookable session kind. Only id, duration and buffer affect slots."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str = ""
    duration_minutes: int = Field(gt=0)
    color: str = ""
    active: bool = True
    buffer_minutes: int = Field(default=0, ge=0)
