import copy
import pickle
import unittest

from collections import Counter

from kvheap.heap import Heap, Ordering


def sample_heap(ordering):
    heap = Heap(ordering)
    for key in [5, 3, 8, 1, 9, 2, 3]:
        heap.add(key, 'v%d' % key)
    return heap


class TestSerialization(unittest.TestCase):
    def test_state_holds_only_ordering(self):
        heap = sample_heap(Ordering.MAX)
        self.assertEqual(heap.__getstate__(), {'ordering': 'max'})

    def test_pickle_round_trip(self):
        for ordering in Ordering:
            heap = sample_heap(ordering)
            for protocol in range(pickle.HIGHEST_PROTOCOL + 1):
                restored = pickle.loads(pickle.dumps(heap, protocol))
                self.assertIs(restored.ordering, ordering)
                self.assertEqual(Counter(restored), Counter(heap))
                self.assertEqual(restored.peek(), heap.peek())

    def test_pickle_empty_heap(self):
        restored = pickle.loads(pickle.dumps(Heap(Ordering.MAX)))
        self.assertIs(restored.ordering, Ordering.MAX)
        self.assertEqual(len(restored), 0)

    def test_copy_and_deepcopy(self):
        heap = sample_heap(Ordering.MAX)
        for clone in (copy.copy(heap), copy.deepcopy(heap)):
            self.assertIsNot(clone, heap)
            self.assertIs(clone.ordering, Ordering.MAX)
            self.assertEqual(clone.extract(), (9, 'v9'))
        self.assertEqual(len(heap), 7)

    def test_two_phase_reconstruction(self):
        # Entries loaded first under the default ordering,
        # then the durable state fixes the order.
        heap = Heap()
        heap.extend([(1, 'a'), (7, 'g'), (4, 'd')])
        self.assertEqual(heap.peek(), (1, 'a'))
        heap.__setstate__({'ordering': 'max'})
        self.assertIs(heap.ordering, Ordering.MAX)
        self.assertEqual(heap.peek(), (7, 'g'))
        self.assertEqual(len(heap), 3)


if __name__ == '__main__':
    unittest.main()
