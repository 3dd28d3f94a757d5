"""
In-Memory Score History Tests

To run these tests:
    pytest tests/progress/implementations/test_memory_history.py -v
"""

import pytest

from core.constants import ShotType
from progress.interfaces.history_interface import HistoryError


@pytest.mark.unit
def test_append_and_filter(memory_history, make_record):
    """
    Test ordering and filters match the SQLite history.
    """
    a = make_record(70)
    b = make_record(75, shot_type=ShotType.REVES)
    c = make_record(80, user_id="other")
    for record in (a, b, c):
        memory_history.append(record)

    assert memory_history.list_records() == [a, b, c]
    assert memory_history.list_records(user_id="player-1") == [a, b]
    assert memory_history.list_records(shot_type="reves") == [b]
    assert memory_history.get(c.id) == c
    assert memory_history.count() == 3


@pytest.mark.unit
def test_duplicate_id_rejected(memory_history, make_record):
    """
    Test duplicate ids raise HistoryError.
    """
    record = make_record(70)
    memory_history.append(record)

    with pytest.raises(HistoryError):
        memory_history.append(record)


@pytest.mark.unit
def test_fail_appends(memory_history, make_record):
    """
    Test injected append failures.
    """
    memory_history.fail_appends()

    with pytest.raises(HistoryError):
        memory_history.append(make_record(70))

    assert memory_history.count() == 0
    assert memory_history.get_operation_log()[-1].startswith("append_failed:")
