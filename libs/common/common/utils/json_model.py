from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class JsonModel(BaseModel):
    """Base for config models read from Python mappings or YAML.

    Fields accept both ``snake_case`` names and ``camelCase`` aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self, by_alias: bool = False, mode: Literal["json", "python"] = "python") -> dict[str, Any]:
        """Dump without unset optional values."""
        return self.model_dump(exclude_none=True, by_alias=by_alias, mode=mode)
