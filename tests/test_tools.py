"""Tests for the MCP tool functions and their input models."""

import json

import pytest
from pydantic import ValidationError

from taskproc_mcp import (
    ClearInput,
    FilterInput,
    FindByTagInput,
    GetTaskInput,
    ListTagsInput,
    LoadSourceInput,
    ResponseFormat,
    SearchInput,
    SortInput,
    StatusInput,
    SummaryInput,
    ViewInput,
    taskproc_clear,
    taskproc_filter,
    taskproc_find_by_tag,
    taskproc_find_untagged,
    taskproc_get,
    taskproc_history,
    taskproc_load,
    taskproc_reload,
    taskproc_reset,
    taskproc_search,
    taskproc_sort,
    taskproc_status,
    taskproc_summary,
    taskproc_tags,
    taskproc_view,
)


@pytest.fixture
def loaded(active_manager, json_file):
    """The active manager with the sample JSON file loaded."""
    active_manager.load_source(json_file)
    return active_manager


# ============================================================================
# Input Models
# ============================================================================


class TestInputModels:
    """Tests for tool input validation."""

    def test_load_requires_path(self):
        """Test a blank path is rejected after stripping."""
        with pytest.raises(ValidationError):
            LoadSourceInput(path="   ")

    def test_filter_expression_stripped(self):
        """Test surrounding whitespace is removed."""
        assert FilterInput(expression="  status=todo ").expression == "status=todo"

    def test_tag_rejects_commas(self):
        """Test a tag cannot contain a comma."""
        with pytest.raises(ValidationError):
            FindByTagInput(tag="bug,urgent")

    def test_view_limit_bounds(self):
        """Test limit must be between 1 and 1000."""
        assert ViewInput().limit == 50
        with pytest.raises(ValidationError):
            ViewInput(limit=0)
        with pytest.raises(ValidationError):
            ViewInput(limit=1001)

    def test_get_task_id_positive(self):
        """Test task_id must be at least 1."""
        with pytest.raises(ValidationError):
            GetTaskInput(task_id=0)

    def test_summary_today_pattern(self):
        """Test today must look like an ISO date."""
        assert SummaryInput(today="2024-02-01").today == "2024-02-01"
        with pytest.raises(ValidationError):
            SummaryInput(today="yesterday")

    def test_response_format_values(self):
        """Test response formats parse from their string values."""
        assert StatusInput(response_format="json").response_format == ResponseFormat.JSON
        assert ListTagsInput(response_format="concise").response_format == ResponseFormat.CONCISE


# ============================================================================
# Source Tools
# ============================================================================


class TestSourceTools:
    """Tests for taskproc_load, taskproc_reload and taskproc_clear."""

    @pytest.mark.asyncio
    async def test_load(self, active_manager, json_file):
        """Test loading reports the task count."""
        result = await taskproc_load(LoadSourceInput(path=str(json_file)))
        assert result == f"Loaded 3 task(s) from {json_file}."
        assert active_manager.task_count() == 3

    @pytest.mark.asyncio
    async def test_load_missing_file(self, active_manager, tmp_path):
        """Test a missing file is reported as an error string."""
        result = await taskproc_load(LoadSourceInput(path=str(tmp_path / "nope.csv")))
        assert result.startswith("Error: Cannot read")

    @pytest.mark.asyncio
    async def test_load_unknown_extension(self, active_manager, tmp_path):
        """Test an unsupported file type is reported."""
        result = await taskproc_load(LoadSourceInput(path=str(tmp_path / "tasks.xml")))
        assert result.startswith("Error: No reader found")

    @pytest.mark.asyncio
    async def test_reload_replays(self, loaded, json_file):
        """Test reload reports replayed actions and keeps the view."""
        await taskproc_filter(FilterInput(expression="status=todo"))
        result = await taskproc_reload()
        assert result == f"Reloaded 3 task(s) from {json_file}. Replayed 1 action(s).\nView: 2 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_reload_reports_skipped_entries(self, active_manager, json_file, storage_path):
        """Test a saved action that no longer compiles is counted as skipped."""
        storage_path.write_text(
            json.dumps(
                {
                    "filepath": str(json_file),
                    "history": [
                        {"type": "filter", "payload": "priority>1"},
                        {"type": "sort", "payload": "weight desc"},
                    ],
                }
            ),
            encoding="utf-8",
        )
        result = await taskproc_reload()
        assert result == f"Reloaded 3 task(s) from {json_file}. Replayed 1 action(s), skipped 1.\nView: 2 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_reload_without_source(self, active_manager):
        """Test reload with nothing loaded."""
        assert await taskproc_reload() == "Error: No source file to reload"

    @pytest.mark.asyncio
    async def test_clear(self, loaded, storage_path):
        """Test clear unloads everything."""
        assert await taskproc_clear(ClearInput()) == "Cleared loaded tasks and saved view."
        assert loaded.task_count() == 0
        assert not storage_path.exists()


# ============================================================================
# View Tools
# ============================================================================


class TestViewTools:
    """Tests for the tools that reshape the view."""

    @pytest.mark.asyncio
    async def test_filter(self, loaded):
        """Test a valid filter reports the new view size."""
        result = await taskproc_filter(FilterInput(expression="status=todo"))
        assert result == "Applied filter 'status=todo'.\nView: 2 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_filter_invalid_expression(self, loaded):
        """Test a bad expression returns an error and leaves the view alone."""
        result = await taskproc_filter(FilterInput(expression="colour=blue"))
        assert result == "Error: Unknown field: colour"
        assert loaded.view_count() == 3

    @pytest.mark.asyncio
    async def test_filter_unsupported_operator(self, loaded):
        """Test an ordering operator on a text field is rejected."""
        result = await taskproc_filter(FilterInput(expression="title>abc"))
        assert result.startswith("Error: Invalid filter")
        assert "not supported" in result

    @pytest.mark.asyncio
    async def test_filter_before_load(self, active_manager):
        """Test view tools need a loaded file."""
        result = await taskproc_filter(FilterInput(expression="status=todo"))
        assert result.startswith("Error: No source file loaded")

    @pytest.mark.asyncio
    async def test_sort(self, loaded):
        """Test sorting reorders the view."""
        result = await taskproc_sort(SortInput(expression="priority desc"))
        assert result.startswith("Sorted by 'priority desc'.")
        assert [t.id for t in loaded.current_view()] == [2, 1, 3]

    @pytest.mark.asyncio
    async def test_sort_unknown_field(self, loaded):
        """Test an unknown sort field is reported."""
        result = await taskproc_sort(SortInput(expression="assignee"))
        assert result == "Error: Unknown sort field: assignee"

    @pytest.mark.asyncio
    async def test_find_by_tag(self, loaded):
        """Test narrowing to a tag."""
        result = await taskproc_find_by_tag(FindByTagInput(tag="urgent"))
        assert result == "Kept tasks tagged 'urgent'.\nView: 1 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_find_untagged(self, loaded):
        """Test narrowing to untagged tasks."""
        result = await taskproc_find_untagged()
        assert result == "Kept untagged tasks.\nView: 1 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_search(self, loaded):
        """Test text search over title and description."""
        result = await taskproc_search(SearchInput(text="safari"))
        assert result == "Kept tasks matching 'safari'.\nView: 1 of 3 task(s)"

    @pytest.mark.asyncio
    async def test_reset(self, loaded):
        """Test reset brings every task back."""
        await taskproc_filter(FilterInput(expression="status=done"))
        assert await taskproc_reset() == "View reset.\nView: 3 of 3 task(s)"


class TestViewOutput:
    """Tests for taskproc_view and taskproc_get."""

    @pytest.mark.asyncio
    async def test_view_markdown(self, loaded):
        """Test the default markdown listing."""
        result = await taskproc_view(ViewInput())
        assert result.startswith("# Current View\n*3 task(s)*")
        assert "### ○ [1] Fix login" in result
        assert "### ● [3] Release 1.0" in result

    @pytest.mark.asyncio
    async def test_view_limit(self, loaded):
        """Test the limit truncates and the header shows the total."""
        result = await taskproc_view(ViewInput(limit=1))
        assert "*showing 1 of 3 task(s)*" in result
        assert "[2]" not in result

    @pytest.mark.asyncio
    async def test_view_concise(self, loaded, json_file):
        """Test the one-line-per-task format."""
        result = await taskproc_view(ViewInput(response_format=ResponseFormat.CONCISE))
        lines = result.split("\n")
        assert lines[0] == f"3 task(s) | {json_file}"
        assert lines[1] == "#1: Fix login (P3, todo, due:2024-01-20, @alice)"

    @pytest.mark.asyncio
    async def test_view_json(self, loaded, json_file):
        """Test the JSON listing follows view order."""
        await taskproc_sort(SortInput(expression="priority desc"))
        data = json.loads(await taskproc_view(ViewInput(response_format=ResponseFormat.JSON)))
        assert data["source"] == str(json_file)
        assert data["total"] == 3
        assert data["count"] == 3
        assert [t["id"] for t in data["tasks"]] == [2, 1, 3]
        assert data["tasks"][1]["tags"] == ["bug", "urgent"]

    @pytest.mark.asyncio
    async def test_view_empty(self, loaded):
        """Test an empty view."""
        await taskproc_filter(FilterInput(expression="id>100"))
        assert await taskproc_view(ViewInput()) == "# Current View\n\nNo tasks found."

    @pytest.mark.asyncio
    async def test_get_markdown(self, loaded):
        """Test task details in markdown."""
        result = await taskproc_get(GetTaskInput(task_id=1))
        assert "### ○ [1] Fix login" in result
        assert "**Tags**: bug, urgent" in result
        assert "> Login fails on Safari" in result

    @pytest.mark.asyncio
    async def test_get_outside_view(self, loaded):
        """Test get reads from the store, not the view."""
        await taskproc_filter(FilterInput(expression="status=todo"))
        data = json.loads(await taskproc_get(GetTaskInput(task_id=3, response_format=ResponseFormat.JSON)))
        assert data["title"] == "Release 1.0"

    @pytest.mark.asyncio
    async def test_get_not_found(self, loaded):
        """Test an unknown id."""
        assert await taskproc_get(GetTaskInput(task_id=99)) == "Error: Task 99 not found."


# ============================================================================
# Status and Statistics Tools
# ============================================================================


class TestStatsTools:
    """Tests for taskproc_status, taskproc_history, taskproc_summary and taskproc_tags."""

    @pytest.mark.asyncio
    async def test_status_nothing_loaded(self, active_manager):
        """Test status before any load."""
        assert await taskproc_status(StatusInput()) == "# Dataset Status\n\nNo task file loaded."

    @pytest.mark.asyncio
    async def test_status_json(self, loaded, json_file):
        """Test status counts in JSON."""
        await taskproc_filter(FilterInput(expression="status=todo"))
        data = json.loads(await taskproc_status(StatusInput(response_format=ResponseFormat.JSON)))
        assert data == {"source": str(json_file), "task_count": 3, "view_count": 2, "history_length": 2}

    @pytest.mark.asyncio
    async def test_status_markdown(self, loaded, json_file):
        """Test the markdown status report."""
        result = await taskproc_status(StatusInput())
        assert f"**Source**: {json_file}" in result
        assert "**Tasks in view**: 3" in result

    @pytest.mark.asyncio
    async def test_history(self, loaded, json_file):
        """Test the numbered action list."""
        await taskproc_filter(FilterInput(expression="status=todo"))
        await taskproc_reset()
        result = await taskproc_history()
        assert f"1. `load` {json_file}" in result
        assert "2. `filter` status=todo" in result
        assert "3. `reset-filters`" in result

    @pytest.mark.asyncio
    async def test_history_empty(self, active_manager):
        """Test history before any load."""
        assert await taskproc_history() == "# View History\n\nNo recorded actions."

    @pytest.mark.asyncio
    async def test_summary_json(self, loaded):
        """Test view statistics in JSON."""
        data = json.loads(
            await taskproc_summary(SummaryInput(today="2024-02-01", response_format=ResponseFormat.JSON))
        )
        assert data["total"] == 3
        assert data["by_status"] == {"todo": 2, "in_progress": 0, "done": 1, "other": 0}
        assert data["average_priority"] == 3.0
        assert data["overdue"] == 1

    @pytest.mark.asyncio
    async def test_summary_markdown(self, loaded):
        """Test the markdown summary."""
        result = await taskproc_summary(SummaryInput(today="2024-02-01"))
        assert "**Average priority**: 3.00" in result
        assert "**Overdue**: 1" in result
        assert "- todo: 2" in result

    @pytest.mark.asyncio
    async def test_summary_empty_view(self, loaded):
        """Test the summary of an empty view."""
        await taskproc_filter(FilterInput(expression="id>100"))
        assert await taskproc_summary(SummaryInput()) == "# View Summary\n\nThe view is empty."

    @pytest.mark.asyncio
    async def test_tags(self, loaded):
        """Test tags are listed with counts."""
        result = await taskproc_tags(ListTagsInput())
        assert "- **bug**: 1 task(s)" in result
        assert result.index("**bug**") < result.index("**docs**") < result.index("**urgent**")

        data = json.loads(await taskproc_tags(ListTagsInput(response_format=ResponseFormat.JSON)))
        assert {"name": "docs", "count": 1} in data["tags"]

    @pytest.mark.asyncio
    async def test_tags_none_loaded(self, active_manager):
        """Test tags with nothing loaded."""
        assert await taskproc_tags(ListTagsInput()) == "# Tags\n\nNo tags found."
