import sys
from pathlib import Path
from typing import Iterator

import pytest


pytest_plugins = [
    "tests.fixtures.hook_builders",
]

# Ensure project root is importable at collection time (module import stage)
_repo_root = Path(__file__).resolve().parents[1]
_repo_root_str = str(_repo_root)
if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)


@pytest.fixture(autouse=True)
def hooks_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear logger settings so env leaks from the shell don't change test output."""
    monkeypatch.delenv("HOOKS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    yield


def pytest_configure(config):
    """Configure pytest with essential markers."""
    config.addinivalue_line("markers", "unit: unit test")
    config.addinivalue_line("markers", "sqs: SQS queue group helper test")
    config.addinivalue_line("markers", "sns: SNS topic helper test")
    config.addinivalue_line("markers", "event_listener: event listener hook test")
    config.addinivalue_line("markers", "infrastructure: CDK synthesis test")
    config.addinivalue_line("markers", "cli: command line test")


def pytest_collection_modifyitems(config, items):
    """Add markers based on file location."""
    rootdir = Path(config.rootdir)

    for item in items:
        rel_path = Path(item.fspath).relative_to(rootdir)

        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        if "sqs" in rel_path.parts:
            item.add_marker(pytest.mark.sqs)
        if "sns" in rel_path.parts:
            item.add_marker(pytest.mark.sns)
        if "event_listener" in rel_path.parts:
            item.add_marker(pytest.mark.event_listener)
        if "infrastructure" in rel_path.parts:
            item.add_marker(pytest.mark.infrastructure)
        if "cli" in rel_path.parts:
            item.add_marker(pytest.mark.cli)
