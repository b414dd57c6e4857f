"""
Shared schema base classes.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing camelCase keys on the wire.

    Python code keeps snake_case attribute names; input is accepted under
    either spelling and output is serialized with the camelCase alias.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MessageResponse(BaseModel):
    """Plain acknowledgement body, e.g. after a delete."""
    message: str
