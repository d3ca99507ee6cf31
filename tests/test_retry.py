import pytest

from minisearch.retry import with_backoff


def test_returns_result_of_first_success():
    calls = []

    def operation():
        calls.append(1)
        return "done"

    assert with_backoff(operation, 5) == "done"
    assert len(calls) == 1


def test_retries_until_success():
    calls = []

    def operation():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("not yet")
        return len(calls)

    assert with_backoff(operation, 10) == 3


def test_gives_up_and_reraises():
    calls = []

    def operation():
        calls.append(1)
        raise ValueError("always")

    with pytest.raises(ValueError, match="always"):
        with_backoff(operation, 0.3)
    assert len(calls) >= 1