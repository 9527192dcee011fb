# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for API payloads: camelCase on the wire, snake_case in Python.

    Requests accept either spelling; responses are serialized by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
