"""Tests for ralph.tasks.selector."""

from ralph.tasks.models import TaskList
from ralph.tasks.selector import count_completed, count_remaining, select_next_item


def _tasks(*stories):
    return TaskList({"title": "t", "userStories": [
        {"id": i, "title": f"story {i}", "passes": p} for i, p in stories
    ]})


class TestSelectNextItem:

    def test_lowest_pending_id(self):
        assert select_next_item(_tasks((1, True), (2, False), (3, False))).id == 2

    def test_by_id_not_position(self):
        # Appended out of order: selection still follows ids
        assert select_next_item(_tasks((5, False), (3, False), (4, False))).id == 3

    def test_none_when_all_complete(self):
        assert select_next_item(_tasks((1, True), (2, True))) is None

    def test_none_when_empty(self):
        assert select_next_item(_tasks()) is None

    def test_deterministic(self):
        task_list = _tasks((1, True), (2, False))
        assert select_next_item(task_list) == select_next_item(task_list)


class TestCounts:

    def test_counts(self):
        task_list = _tasks((1, True), (2, False), (3, False))
        assert count_completed(task_list) == 1
        assert count_remaining(task_list) == 2

    def test_empty(self):
        assert count_completed(_tasks()) == 0
        assert count_remaining(_tasks()) == 0
