from datetime import datetime, timedelta, timezone

from effortlog.models.task import Task
from effortlog.services.effort import UserEffort, compute_effort, rank_efforts

T0 = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


def _task(task_id, minutes, user_id=1, seconds=0):
    return Task(
        task_id=task_id,
        user_id=user_id,
        start_time=T0,
        end_time=T0 + timedelta(minutes=minutes, seconds=seconds),
    )


def test_ninety_minute_session_reports_total_minutes():
    [effort] = compute_effort([_task(1, 90, user_id=7)])

    assert effort == UserEffort(user_id=7, task_id=1, hours=1, minutes=90)


def test_partial_minutes_and_hours_are_floored():
    [effort] = compute_effort([_task(1, 59, seconds=59)])

    assert effort.hours == 0
    assert effort.minutes == 59


def test_open_sessions_are_skipped():
    open_task = Task(task_id=2, user_id=1, start_time=T0, end_time=None)

    assert compute_effort([open_task, _task(3, 10)]) == [
        UserEffort(user_id=1, task_id=3, hours=0, minutes=10)
    ]


def test_naive_timestamps_from_sqlite_are_treated_as_utc():
    naive = Task(
        task_id=4,
        user_id=1,
        start_time=datetime(2024, 3, 4, 9, 0),
        end_time=datetime(2024, 3, 4, 11, 30),
    )

    [effort] = compute_effort([naive])

    assert (effort.hours, effort.minutes) == (2, 150)


def test_rank_efforts_handles_empty_and_singleton():
    single = [UserEffort(1, 1, 0, 5)]

    assert rank_efforts([]) == []
    assert rank_efforts(single) == single


def test_rank_efforts_is_non_increasing_in_rank_key():
    efforts = compute_effort([_task(1, 30), _task(2, 125), _task(3, 5), _task(4, 61)])

    ranked = rank_efforts(efforts)

    assert [e.task_id for e in ranked] == [2, 4, 1, 3]
    keys = [e.hours * 60 + e.minutes for e in ranked]
    assert keys == sorted(keys, reverse=True)
    # 125 minutes -> 2 * 60 + 125
    assert ranked[0].rank_key == 245


def test_rank_efforts_keeps_input_order_for_ties():
    efforts = [UserEffort(1, 10, 0, 20), UserEffort(1, 11, 1, 70), UserEffort(1, 12, 0, 20)]

    ranked = rank_efforts(efforts)

    assert [e.task_id for e in ranked] == [11, 10, 12]
