'''
Linked collections.

On the wire the repeatable data (soft pointers, comment lines, layer names,
binary chunks) and the sequences of records of the same type are singly-linked
lists: here we keep them into a python list, the links exist only between
records (via their "next" attribute) since those are the ones that must be
released one at a time.
'''
import logging

from .exceptions import LifecycleException


logger = logging.getLogger(__name__)


def is_linked(element):
    return hasattr(element, 'next')


class Chain(object):
    '''Ordered sequence where elements can only be appended and visited forward.'''

    def __init__(self, elements=None):
        self._elements = []

        for element in elements or []:
            self.push_back(element)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self._elements)

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __getitem__(self, item):
        return self._elements[item]

    def __bool__(self):
        return len(self._elements) > 0

    def __eq__(self, other):
        if isinstance(other, Chain):
            return self._elements == other._elements
        if isinstance(other, (list, tuple)):
            return self._elements == list(other)
        return NotImplemented

    @property
    def head(self):
        return self._elements[0] if self._elements else None

    @property
    def tail(self):
        return self._elements[-1] if self._elements else None

    def push_back(self, element):
        if is_linked(element):
            if element.next is not None:
                raise LifecycleException(
                    f'{element.__class__.__name__} has already a successor and can\'t be appended')
            if self.tail is not None:
                self.tail.next = element

        self._elements.append(element)

        return element

    def for_each(self, function):
        for element in self._elements:
            function(element)

    def release_all(self):
        '''Release every element starting from the head.

        Each record is detached from its successor before being released, so
        that a long sequence is walked without recursion.'''
        logger.debug('releasing %d elements', len(self._elements))

        for element in self._elements:
            if is_linked(element):
                element.next = None
            if hasattr(element, 'release'):
                element.release()

        self._elements = []


def iter_linked(head):
    '''Walk a sequence of records following the "next" links.'''
    node = head
    while node is not None:
        yield node
        node = node.next


def release_linked(head):
    '''Release a sequence of records given only its head.'''
    node = head
    while node is not None:
        successor = node.next
        node.next = None
        node.release()
        node = successor
