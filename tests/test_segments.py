import unittest

from memory.errors import InvariantViolation
from memory.holes import HoleTracker
from memory.segments import Hole, ProcessTable, Segment


class ProcessTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.table = ProcessTable()

    def test_insert_keeps_begin_order(self) -> None:
        self.table.insert("B", 40, 10)
        self.table.insert("A", 0, 5)
        self.table.insert("C", 20, 10)
        self.assertEqual([s.begin for s in self.table], [0, 20, 40])
        self.assertEqual(self.table.segments()[1], Segment("C", 20, 29))

    def test_insert_rejects_overlap(self) -> None:
        self.table.insert("A", 10, 10)
        with self.assertRaises(InvariantViolation):
            self.table.insert("B", 15, 10)
        with self.assertRaises(InvariantViolation):
            self.table.insert("B", 5, 6)
        self.assertEqual(len(self.table), 1)

    def test_remove_all_drops_every_segment_of_owner(self) -> None:
        self.table.insert("A", 0, 5)
        self.table.insert("B", 5, 5)
        self.table.insert("A", 10, 5)
        removed = self.table.remove_all("A")
        self.assertEqual([s.begin for s in removed], [0, 10])
        self.assertEqual(self.table.segments(), [Segment("B", 5, 9)])

    def test_remove_unknown_owner_is_noop(self) -> None:
        self.table.insert("A", 0, 5)
        self.assertEqual(self.table.remove_all("Z"), [])
        self.assertEqual(self.table.segments(), [Segment("A", 0, 4)])


class HoleTrackerTests(unittest.TestCase):
    def test_initial_state_is_one_hole(self) -> None:
        tracker = HoleTracker(80)
        self.assertEqual(tracker.holes, [Hole(0, 79)])
        self.assertEqual(tracker.max_hole, 80)

    def test_rebuild_emits_gaps_and_trailing_hole(self) -> None:
        table = ProcessTable()
        table.insert("A", 5, 5)
        table.insert("B", 10, 10)
        table.insert("C", 30, 10)
        tracker = HoleTracker(50)
        tracker.rebuild(table, 50)
        self.assertEqual(tracker.holes, [Hole(0, 4), Hole(20, 29), Hole(40, 49)])
        self.assertEqual(tracker.max_hole, 10)

    def test_full_space_has_no_holes(self) -> None:
        table = ProcessTable()
        table.insert("A", 0, 10)
        tracker = HoleTracker(10)
        tracker.rebuild(table, 10)
        self.assertEqual(tracker.holes, [])
        self.assertEqual(tracker.max_hole, 0)


if __name__ == "__main__":
    unittest.main()
