import itertools
import json

import pytest

from usagechart.schemas.usage import Session


@pytest.fixture
def make_session():
    """Build a Session from ISO-8601 strings."""
    ids = itertools.count(1)

    def _make(app_name, start, end, category="System"):
        return Session(
            session_id=f"s-{next(ids)}",
            app_name=app_name,
            category=category,
            start_timestamp=start,
            end_timestamp=end,
        )

    return _make


@pytest.fixture
def sessions_file(tmp_path):
    """Write a list of session dicts to a JSON file and return its path."""

    def _write(rows, name="sessions.json"):
        path = tmp_path / name
        path.write_text(json.dumps(rows), encoding="utf-8")
        return path

    return _write
