"""Immutable, reference-counted singly-linked list with structural sharing.

A ``PersistentList`` is a handle onto a chain of ``ListNode`` objects. Prepending
creates one new node that points at the existing chain, so any number of lists
can share a common suffix without copying it. Each node counts the handles and
nodes that reference it. When a count drops to zero the node is freed and its
successor's count is decremented in turn, in a loop rather than by recursion,
so arbitrarily long chains can be torn down safely.

Example:
    >>> x = PersistentList.empty().prepend(1).prepend(2)
    >>> y = x.prepend(3)
    >>> list(y)
    [3, 2, 1]
    >>> y.tail() == x
    True
"""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

from stagegraph.exceptions import EmptyListAccess

T = TypeVar("T")


class NodeLedger:
    """Counts node allocations and releases for a family of lists.

    A ledger is attached when a node is prepended and is inherited by every node
    later prepended onto that chain. Tests use it to prove that every node is
    released exactly once.

    Attributes:
        allocated: Number of nodes created.
        released: Number of nodes freed.
    """

    def __init__(self) -> None:
        self.allocated = 0
        self.released = 0

    @property
    def live(self) -> int:
        """Number of nodes created but not yet freed."""
        return self.allocated - self.released

    def on_allocate(self, node: "ListNode") -> None:
        self.allocated += 1

    def on_release(self, node: "ListNode") -> None:
        self.released += 1

    def __repr__(self) -> str:
        return (
            f"NodeLedger(allocated={self.allocated}, released={self.released}, "
            f"live={self.live})"
        )


class ListNode(Generic[T]):
    """One cell of a persistent list. Immutable apart from its reference count."""

    __slots__ = ("value", "refcount", "next", "ledger", "freed")

    def __init__(
        self,
        value: T,
        next_node: Optional["ListNode[T]"],
        ledger: Optional[NodeLedger] = None,
    ) -> None:
        self.value = value
        self.refcount = 1
        self.next = next_node
        self.ledger = ledger
        self.freed = False


def _acquire(node: Optional[ListNode[T]]) -> Optional[ListNode[T]]:
    if node is not None:
        if node.freed:
            raise RuntimeError("Attempted to share a node that was already released")
        node.refcount += 1
    return node


def _release_chain(node: Optional[ListNode[T]]) -> None:
    """Drop one reference to ``node`` and free every node that becomes unowned.

    Stops at the first node that is still referenced elsewhere, or at the end of
    the chain.
    """
    while node is not None:
        if node.freed:
            raise RuntimeError("List node released more than once")
        node.refcount -= 1
        if node.refcount > 0:
            return
        successor = node.next
        node.next = None
        node.freed = True
        if node.ledger is not None:
            node.ledger.on_release(node)
        node = successor


class PersistentList(Generic[T]):
    """Handle onto a shared, immutable chain of values.

    Equality is identity of the underlying chain: two handles compare equal only
    when they point at the very same front node (or are both empty). Contents are
    never compared.

    Handles are released explicitly with :meth:`release`. A handle that is
    garbage collected without being released gives up its reference then.
    Releasing twice is a no-op.
    """

    __slots__ = ("_node", "__weakref__")

    def __init__(self, _node: Optional[ListNode[T]] = None) -> None:
        # Takes ownership of one reference to ``_node``; callers outside this
        # module should use ``empty()`` and ``prepend()``.
        self._node = _node

    @classmethod
    def empty(cls) -> "PersistentList[T]":
        """Return the canonical empty list."""
        return NIL

    def is_empty(self) -> bool:
        return self._node is None

    def head(self) -> T:
        """Return the front value.

        Raises:
            EmptyListAccess: If the list is empty.
        """
        if self._node is None:
            raise EmptyListAccess("head() of an empty list")
        return self._node.value

    def tail(self) -> "PersistentList[T]":
        """Return the list without its front value, sharing the remaining nodes.

        Raises:
            EmptyListAccess: If the list is empty.
        """
        if self._node is None:
            raise EmptyListAccess("tail() of an empty list")
        successor = self._node.next
        if successor is None:
            return NIL
        return PersistentList(_acquire(successor))

    def prepend(
        self, value: T, ledger: Optional[NodeLedger] = None
    ) -> "PersistentList[T]":
        """Return a new list with ``value`` in front of this one.

        This list is not modified; the new list shares all of its nodes.

        Args:
            value: Value stored in the new front node.
            ledger: Allocation ledger for the new node. Defaults to the ledger of
                this list's front node, if any.
        """
        node = self._node
        if ledger is None and node is not None:
            ledger = node.ledger
        new_node = ListNode(value, _acquire(node), ledger)
        if ledger is not None:
            ledger.on_allocate(new_node)
        return PersistentList(new_node)

    def copy(self) -> "PersistentList[T]":
        """Return another handle onto the same chain in O(1)."""
        if self._node is None:
            return NIL
        return PersistentList(_acquire(self._node))

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "PersistentList[T]":
        return self.copy()

    def release(self) -> None:
        """Give up this handle's reference. The handle becomes empty."""
        node = self._node
        if node is None:
            return
        self._node = None
        _release_chain(node)

    def __del__(self) -> None:
        node = getattr(self, "_node", None)
        if node is not None and not node.freed:
            self._node = None
            _release_chain(node)

    def __iter__(self) -> Iterator[T]:
        keeper = self.copy()
        try:
            node = keeper._node
            while node is not None:
                yield node.value
                node = node.next
        finally:
            keeper.release()

    def __len__(self) -> int:
        count = 0
        node = self._node
        while node is not None:
            count += 1
            node = node.next
        return count

    def __bool__(self) -> bool:
        return self._node is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PersistentList):
            return NotImplemented
        return self._node is other._node

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """Hash the node the handle refers to, consistent with ``==``.

        ``release()`` turns a handle into the empty list, so its hash changes
        to that of ``NIL``. Take a handle out of sets and dict keys before
        releasing it.
        """
        return id(self._node)

    def __repr__(self) -> str:
        return f"PersistentList({list(self)!r})"


#: The canonical empty list.
NIL: PersistentList = PersistentList()
