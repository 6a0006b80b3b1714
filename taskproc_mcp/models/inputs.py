"""Input models for TaskProc MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskproc_mcp.enums import ResponseFormat

# ============================================================================
# Source Tool Input Models
# ============================================================================


class LoadSourceInput(BaseModel):
    """Input model for loading a task file."""

    model_config = ConfigDict(str_strip_whitespace=True)

    path: str = Field(..., description="Path to a .csv or .json task file", min_length=1)


class ClearInput(BaseModel):
    """Input model for clearing the loaded data and saved view."""

    model_config = ConfigDict(str_strip_whitespace=True)
    # No parameters needed - clear is a global operation


# ============================================================================
# View Tool Input Models
# ============================================================================


class FilterInput(BaseModel):
    """Input model for applying a filter expression."""

    model_config = ConfigDict(str_strip_whitespace=True)

    expression: str = Field(
        ...,
        description="Filter expression '<field><op><value>' (e.g., 'priority>=3', 'status=todo', 'due_date<2025-01-01')",
        min_length=1,
    )


class SortInput(BaseModel):
    """Input model for applying a sort expression."""

    model_config = ConfigDict(str_strip_whitespace=True)

    expression: str = Field(
        ...,
        description="Sort expression '<field> [asc|desc]' (e.g., 'priority desc', 'due_date')",
        min_length=1,
    )


class FindByTagInput(BaseModel):
    """Input model for narrowing the view to a tag."""

    model_config = ConfigDict(str_strip_whitespace=True)

    tag: str = Field(..., description="Tag the tasks must carry", min_length=1, max_length=200)

    @field_validator("tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        if "," in v:
            raise ValueError("Tag cannot contain commas")
        return v


class SearchInput(BaseModel):
    """Input model for full-text search over title and description."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., description="Case-insensitive text to look for", min_length=1, max_length=500)


class ViewInput(BaseModel):
    """Input model for listing the current view."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int | None = Field(default=50, description="Maximum number of tasks to return", ge=1, le=1000)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise' or 'json'",
    )


class GetTaskInput(BaseModel):
    """Input model for getting a single task from the store."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to retrieve", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class StatusInput(BaseModel):
    """Input model for the dataset status report."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class SummaryInput(BaseModel):
    """Input model for view statistics."""

    model_config = ConfigDict(str_strip_whitespace=True)

    today: str | None = Field(
        default=None,
        description="ISO-8601 date used to count overdue tasks (defaults to the local date)",
        pattern=r"^\d{4}-\d{2}-\d{2}",
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class ListTagsInput(BaseModel):
    """Input model for listing tags in the store."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )
