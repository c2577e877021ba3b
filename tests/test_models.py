"""Unit tests for Task, Idle and Workload."""

import math
import unittest
from staticsched.models import Idle, Task, Workload


class TestTask(unittest.TestCase):
    """Test Task validation and launch-window arithmetic."""

    def test_defaults(self):
        """Test that delay defaults to 0 and deadline to the period."""
        task = Task("τ1", period=10, duration=2)
        self.assertEqual(task.delay, 0)
        self.assertEqual(task.deadline, 10)
        self.assertEqual(task.last_launch, -10)
        self.assertAlmostEqual(task.utilization, 0.2)

    def test_invalid_zero_period(self):
        with self.assertRaises(ValueError):
            Task("τ1", period=0, duration=1)

    def test_invalid_negative_period(self):
        with self.assertRaises(ValueError):
            Task("τ1", period=-5, duration=1)

    def test_invalid_zero_duration(self):
        with self.assertRaises(ValueError):
            Task("τ1", period=10, duration=0)

    def test_invalid_negative_delay(self):
        with self.assertRaises(ValueError):
            Task("τ1", period=10, duration=1, delay=-1)

    def test_invalid_negative_deadline(self):
        with self.assertRaises(ValueError):
            Task("τ1", period=10, duration=1, deadline=-1)

    def test_invalid_deadline_exceeds_period(self):
        """Test that a deadline reaching into the next period is rejected."""
        with self.assertRaises(ValueError):
            Task("τ1", period=5, duration=2, delay=2, deadline=10)
        with self.assertRaises(ValueError):
            Task("τ1", period=10, duration=1, deadline=11)

    def test_deadline_equals_period(self):
        task = Task("τ1", period=10, duration=1, deadline=10)
        self.assertEqual(task.deadline, 10)

    def test_tight_deadline_allowed(self):
        """Test that deadline < delay + duration is accepted (it just never fits)."""
        task = Task("τ1", period=10, duration=4, delay=2, deadline=5)
        self.assertEqual(task.deadline, 5)

    def test_next_deadline_initial(self):
        """Test that the first deadline lies in period 0."""
        task = Task("τ1", period=10, duration=2, delay=0, deadline=8)
        self.assertEqual(task.next_deadline(), 8)

    def test_next_deadline_after_launch(self):
        """Test that a launch moves the deadline to the following period."""
        task = Task("τ1", period=10, duration=2, delay=0, deadline=8)
        task.launch(3)
        self.assertEqual(task.next_deadline(), 18)
        task.launch(12)
        self.assertEqual(task.next_deadline(), 28)

    def test_launch_returns_undo_token(self):
        task = Task("τ1", period=10, duration=2)
        token = task.launch(5)
        self.assertEqual(token, -10)
        self.assertEqual(task.last_launch, 5)
        self.assertEqual(task.launch(token), 5)
        self.assertEqual(task.last_launch, -10)

    def test_must_wait_before_release(self):
        task = Task("τ1", period=10, duration=2, delay=3)
        self.assertEqual(task.must_wait(0), 3)
        self.assertEqual(task.must_wait(3), 0)
        self.assertEqual(task.must_wait(5), 0)

    def test_must_wait_after_running_this_period(self):
        """Test that a task that already ran waits for the next release."""
        task = Task("τ1", period=10, duration=2, delay=3)
        task.launch(5)
        self.assertEqual(task.must_wait(7), 6)
        self.assertEqual(task.must_wait(12), 1)
        self.assertEqual(task.must_wait(13), 0)

    def test_reset(self):
        task = Task("τ1", period=10, duration=2)
        task.launch(40)
        task.reset()
        self.assertEqual(task.last_launch, -10)

    def test_edf_ordering_is_stable(self):
        """Test that sorting by next deadline keeps input order on ties."""
        a = Task("a", period=10, duration=1)
        b = Task("b", period=20, duration=1, deadline=5)
        c = Task("c", period=10, duration=1)
        ordered = sorted([a, b, c], key=lambda t: t.next_deadline())
        self.assertEqual([t.name for t in ordered], ["b", "a", "c"])

    def test_identity_equality(self):
        """Test that two tasks with equal parameters are distinct entries."""
        a = Task("a", period=10, duration=1)
        b = Task("a", period=10, duration=1)
        self.assertNotEqual(a, b)


class TestIdle(unittest.TestCase):
    """Test the idle filler entry."""

    def test_idle(self):
        idle = Idle(4)
        self.assertEqual(idle.duration, 4)
        self.assertEqual(idle.name, "Idle")
        self.assertEqual(idle.next_deadline(), math.inf)
        self.assertIsNone(idle.launch(7))

    def test_idle_is_not_a_task(self):
        self.assertNotIsInstance(Idle(1), Task)


class TestWorkload(unittest.TestCase):
    """Test Workload container behaviour."""

    def test_empty_workload(self):
        workload = Workload("empty")
        self.assertEqual(len(workload), 0)
        self.assertEqual(workload.tasks(), ())
        self.assertEqual(workload.total_utilization, 0.0)

    def test_snapshot_is_cached(self):
        workload = Workload("w")
        workload.add(Task("a", period=10, duration=1))
        self.assertIs(workload.tasks(), workload.tasks())

    def test_add_invalidates_snapshot(self):
        workload = Workload("w")
        a = Task("a", period=10, duration=1)
        b = Task("b", period=20, duration=2)
        workload.add(a)
        first = workload.tasks()
        workload.add(b)
        second = workload.tasks()
        self.assertEqual(first, (a,))
        self.assertEqual(second, (a, b))

    def test_iteration_and_indexing(self):
        workload = Workload("w")
        tasks = [Task("a", period=10, duration=1), Task("b", period=20, duration=4)]
        for t in tasks:
            workload.add(t)
        self.assertEqual(list(workload), tasks)
        self.assertIs(workload[1], tasks[1])
        self.assertAlmostEqual(workload.total_utilization, 0.3)

    def test_reset(self):
        workload = Workload("w")
        a = Task("a", period=10, duration=1)
        workload.add(a)
        a.launch(30)
        workload.reset()
        self.assertEqual(a.last_launch, -10)


if __name__ == "__main__":
    unittest.main()
