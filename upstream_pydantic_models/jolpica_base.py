from pydantic import BaseModel, ConfigDict


class JolpicaBaseModel(BaseModel):
    """Ergast payloads use PascalCase/camelCase keys; models expose snake_case names."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
