"""Shared pydantic base for models whose wire shape is camelCase."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire.

    Registry payloads and tool payloads both use camelCase; either spelling is
    accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
