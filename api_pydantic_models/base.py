from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiBaseModel(BaseModel):
    """
    Base for every response model.
    Attributes are snake_case in Python and camelCase on the wire (FastAPI serialises by alias).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
