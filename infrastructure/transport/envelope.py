"""
Wire-level models: the response envelope and the camelCase model base.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

SUCCESS_CODES = frozenset({0, 200})


class ApiModel(BaseModel):
    """Base for every payload exchanged with the remote service (camelCase on the wire)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Envelope(BaseModel):
    """Uniform {code, message, data} wrapper of every response"""

    code: int
    message: Optional[str] = ""
    data: Any = None

    @property
    def is_success(self) -> bool:
        return self.code in SUCCESS_CODES
