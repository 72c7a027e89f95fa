"""Per-member locks serialising cart mutations and checkout.

A member's add-to-cart calls and checkout run one at a time, so a merged
quantity cannot be lost and no line can slip in between the checkout snapshot
and the cart clear. Different members never contend.

A member's lock exists only while some thread holds or waits for it, so the
registry stays as small as the number of members active at once.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _MemberLock:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.RLock()
        self.users = 0


class MemberLocks:
    def __init__(self):
        self._locks_by_member: dict[str, _MemberLock] = {}
        self._global_lock = threading.Lock()

    def __len__(self) -> int:
        with self._global_lock:
            return len(self._locks_by_member)

    def __contains__(self, member_id) -> bool:
        with self._global_lock:
            return str(member_id) in self._locks_by_member

    def _checkout(self, member_id: str) -> _MemberLock:
        with self._global_lock:
            entry = self._locks_by_member.get(member_id)
            if entry is None:
                entry = self._locks_by_member[member_id] = _MemberLock()
            entry.users += 1
            return entry

    def _checkin(self, member_id: str, entry: _MemberLock) -> None:
        with self._global_lock:
            entry.users -= 1
            if entry.users == 0:
                del self._locks_by_member[member_id]

    @contextmanager
    def hold(self, member_id: str) -> Iterator[None]:
        # Re-entrant: checkout holds the lock while the cart store takes it again.
        member_id = str(member_id)
        entry = self._checkout(member_id)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(member_id, entry)


member_locks = MemberLocks()
