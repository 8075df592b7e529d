import unittest

import pytest

from dxfstruct.chain import Chain, iter_linked, release_linked
from dxfstruct.exceptions import LifecycleException
from dxfstruct.records import Comment


class ChainTests(unittest.TestCase):

    def setUp(self):
        self.comments = [Comment(value=_) for _ in ('a', 'b', 'c')]
        self.chain = Chain(self.comments)

    def test_links(self):
        self.assertIs(self.chain.head, self.comments[0])
        self.assertIs(self.chain.tail, self.comments[2])
        self.assertIs(self.comments[0].next, self.comments[1])
        self.assertIs(self.comments[1].next, self.comments[2])
        self.assertIsNone(self.comments[2].next)

    def test_for_each(self):
        visited = []
        self.chain.for_each(lambda _: visited.append(_.value.value))

        self.assertEqual(visited, ['a', 'b', 'c'])
        self.assertEqual([_.value.value for _ in iter_linked(self.chain.head)], ['a', 'b', 'c'])

    def test_push_back_linked(self):
        """An element already linked to a successor can't be appended."""
        with self.assertRaises(LifecycleException):
            Chain().push_back(self.comments[0])

    def test_release_all(self):
        self.chain.release_all()

        self.assertEqual(len(self.chain), 0)

        for comment in self.comments:
            self.assertTrue(comment.released)
            self.assertIsNone(comment.next)
            self.assertEqual(comment.value.value, '')


def test_plain_values():
    chain = Chain([1, 2])
    chain.push_back(3)

    assert chain == [1, 2, 3]
    assert chain[-1] == 3
    assert bool(chain)
    assert not Chain()


def test_release_linked_long_sequence():
    """A long sequence is released without recursion."""
    chain = Chain(Comment(value=str(_)) for _ in range(5000))
    head = chain.head

    release_linked(head)

    assert all(_.released for _ in chain)
    assert all(_.next is None for _ in chain)


def test_release_head_with_successor():
    first, second = Comment(value='first'), Comment(value='second')
    Chain([first, second])

    with pytest.raises(LifecycleException):
        first.release()

    assert first.value.value == 'first'
