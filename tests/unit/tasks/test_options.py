from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from arequest.tasks.options import RateLimitByPercent, RateLimitByPredicate, TaskOptions

#######################################
#     Tests for RateLimitByPercent    #
#######################################


@pytest.mark.parametrize("percent", [0, 25.5, 100])
def test_rate_limit_by_percent_valid(percent: float) -> None:
    assert RateLimitByPercent(percent).percent == percent


@pytest.mark.parametrize("percent", [-1, 100.5])
def test_rate_limit_by_percent_invalid(percent: float) -> None:
    with pytest.raises(ValueError, match=r"percent must be between 0 and 100"):
        RateLimitByPercent(percent)


def test_rate_limit_by_predicate_defaults() -> None:
    rule = RateLimitByPredicate(bool)

    assert rule.predicate is bool
    assert rule.get_rate_limit_status is None


################################
#     Tests for TaskOptions    #
################################


def test_task_options_defaults() -> None:
    options = TaskOptions()

    assert options.due_time == 0.0
    assert options.repeat_interval == 0.0
    assert options.repeat_times == 0
    assert options.continue_on_error
    assert options.rate_limit is None
    assert not options.is_recurring


@pytest.mark.parametrize(("interval", "recurring"), [(-1.0, False), (0.0, False), (0.5, True)])
def test_task_options_is_recurring(interval: float, recurring: bool) -> None:
    assert TaskOptions(repeat_interval=interval).is_recurring is recurring


def test_task_options_negative_due_time() -> None:
    with pytest.raises(ValueError, match=r"due_time must be >= 0"):
        TaskOptions(due_time=-1.0)


def test_task_options_negative_repeat_times() -> None:
    with pytest.raises(ValueError, match=r"repeat_times must be >= 0"):
        TaskOptions(repeat_times=-1)


def test_task_options_frozen() -> None:
    options = TaskOptions()
    with pytest.raises(FrozenInstanceError):
        options.repeat_times = 3
