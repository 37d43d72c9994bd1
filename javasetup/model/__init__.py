from typing import Any

import pydantic
from pydantic import ConfigDict


class MetaBase(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_json(self, **kwargs: Any) -> str:
        for k in ["exclude_none", "by_alias", "indent"]:
            if k in kwargs:
                del kwargs[k]

        return self.model_dump_json(exclude_none=True, by_alias=True, indent=4, **kwargs)

    def write(self, file_path):
        with open(file_path, "w") as f:
            f.write(self.to_json())


class MetaList(pydantic.RootModel):
    """A JSON array of models, iterable like the list it wraps."""

    def __iter__(self):
        return iter(self.root)
