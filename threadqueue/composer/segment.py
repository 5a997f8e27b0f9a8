# threadqueue/composer/segment.py
from pydantic import BaseModel, ConfigDict, Field


class Segment(BaseModel):
    """One editable unit of a thread. Only ``content`` may change after construction."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(frozen=True)
    content: str = ""

    def replace_content(self, content: str) -> None:
        self.content = content
