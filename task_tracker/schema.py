from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from task_tracker.errors import BadRequest


class TaskIn(BaseModel):
    """
    Task fields a client may send.

    JSON types must match exactly: "5", 5.0 and true are not an urgency.
    Missing fields and explicit nulls decode to zero values.
    """

    model_config = ConfigDict(strict=True)

    description: str = ""
    deadline: str = ""
    timeRequired: str = ""
    priority: str = ""
    urgency: int = 0
    dependencies: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    subtasks: list[str] = Field(default_factory=list)
    group: Optional[str] = None

    @field_validator(
        "description", "deadline", "timeRequired", "priority", "urgency",
        "dependencies", "resources", "subtasks", "group",
        mode="before",
    )
    @classmethod
    def null_is_zero(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class Task(TaskIn):
    id: str

    def to_document(self) -> dict[str, Any]:
        # The id is the document key, it is not stored as a field.
        return self.model_dump(exclude={"id"}, exclude_none=True)

    @classmethod
    def from_document(cls, doc_id: str, data: Optional[dict[str, Any]]) -> "Task":
        return cls(**{**(data or {}), "id": doc_id})


def decode_task(raw: bytes) -> TaskIn:
    """Decode a request body, raising BadRequest with the parse message."""
    # A JSON null decodes to an all-zero task.
    if raw.strip() == b"null":
        return TaskIn()
    try:
        return TaskIn.model_validate_json(raw)
    except ValidationError as e:
        raise BadRequest(str(e)) from e
