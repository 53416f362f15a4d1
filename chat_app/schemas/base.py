from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire.

    Python code keeps using snake_case; both spellings are accepted on input.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
