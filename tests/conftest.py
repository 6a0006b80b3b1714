"""Pytest configuration and fixtures for taskproc-mcp tests."""

import json

import pytest

from taskproc_mcp import DataManager, TaskModel, set_manager

CSV_HEADER = "id,title,status,priority,description,assignee,due_date,created_date,tags\n"


@pytest.fixture
def sample_task_dicts():
    """Raw task records as they appear in a JSON source file."""
    return [
        {
            "id": 1,
            "title": "Fix login",
            "status": "todo",
            "priority": 3,
            "created_date": "2024-01-15",
            "description": "Login fails on Safari",
            "assignee": "alice",
            "due_date": "2024-01-20",
            "tags": ["bug", "urgent"],
        },
        {
            "id": 2,
            "title": "Write docs",
            "status": "todo",
            "priority": 5,
            "created_date": "2024-01-10",
            "due_date": "2024-03-01",
            "tags": ["docs"],
        },
        {
            "id": 3,
            "title": "Release 1.0",
            "status": "done",
            "priority": 1,
            "created_date": "2024-01-05",
            "assignee": "bob",
            "due_date": "2024-01-01",
        },
    ]


@pytest.fixture
def sample_tasks(sample_task_dicts):
    """The sample records as TaskModel instances."""
    return [TaskModel.model_validate(d) for d in sample_task_dicts]


@pytest.fixture
def json_file(tmp_path, sample_task_dicts):
    """A JSON source file holding the sample tasks."""
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(sample_task_dicts), encoding="utf-8")
    return path


@pytest.fixture
def csv_file(tmp_path):
    """A CSV source file with four valid tasks."""
    path = tmp_path / "tasks.csv"
    path.write_text(
        CSV_HEADER
        + '1,"Fix login","todo",5,"desc","alice","2024-01-20","2024-01-15","bug,urgent,frontend"\n'
        + '2,"Single tag","done",1,"desc2","bob","2024-01-22","2024-01-10","docs"\n'
        + '3,"Review PR","in-progress",3,,,,"2024-01-12",\n'
        + '4,"Plan sprint","blocked",2,"","","2024-02-01","2024-01-11","urgent"\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def storage_path(tmp_path):
    """Location of the durable action log for a test."""
    return tmp_path / ".taskproc.storage"


@pytest.fixture
def manager(storage_path):
    """A DataManager with an empty store and no saved history."""
    return DataManager(storage_path)


@pytest.fixture
def active_manager(manager):
    """Install ``manager`` as the process-wide DataManager used by the tools."""
    set_manager(manager)
    yield manager
    set_manager(None)
