"""Shared pydantic base for planner records."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlannerModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON.

    Records cross the store and agent boundaries as camelCase JSON
    (``goalId``, ``dailySessions``...). Both spellings validate on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Dump as a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
