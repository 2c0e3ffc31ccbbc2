from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Timezone-aware UTC now, used for every timestamp in the project."""
    return datetime.now(timezone.utc)


class BaseDTO(BaseModel):
    """
    Base class of every DTO in the project.

    Features:
        - from_attributes=True (build from arbitrary objects)
        - populate_by_name=True (snake_case names accepted next to aliases)
    """
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True
    )


class CamelDTO(BaseDTO):
    """
    DTO exchanged with the browser client, which speaks camelCase.
    """
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# -------------------------------------------------------------------------
# Document Extraction DTOs
# -------------------------------------------------------------------------
class DocumentTextDTO(BaseDTO):
    text: str
    mime_type: str
    metadata: dict[str, Any] = {}


class ProfileGuessDTO(BaseDTO):
    name: str = ""
    email: str = ""
    phone: str = ""
