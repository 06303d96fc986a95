from typing import Callable, Optional, Tuple


class FlagIterator:
    """
    Cursor over the set bits of a mask, lowest bit first.

    The mask is captured when the iterator is created, so changes to the
    owner afterwards are not seen and several iterators can walk the same
    owner at once.  The explicit protocol is start() / has_current() /
    current() / current_key() / advance(); the object is also a normal
    Python iterator yielding (bit, name) pairs.
    """

    def __init__(self, mask: int, name_lookup: Optional[Callable[[int], str]] = None, width: int = 64):
        self.mask = mask
        self.name_lookup = name_lookup
        self.width = width
        self.cursor = 0
        self._started = False

    def _past_width(self) -> bool:
        return (self.cursor >> self.width) != 0

    def start(self):
        self._started = True
        if self.mask == 0:
            self.cursor = 0
            return

        self.cursor = 1
        while (self.mask & self.cursor) == 0:
            self.cursor <<= 1
            if self._past_width():
                self.cursor = 0
                return

    def has_current(self) -> bool:
        return self.cursor > 0

    def current(self) -> str:
        if self.name_lookup is None:
            return ""
        return self.name_lookup(self.cursor)

    def current_key(self) -> int:
        return self.cursor

    def advance(self):
        self.cursor <<= 1
        if self._past_width():
            self.cursor = 0
        while (self.mask & self.cursor) == 0 and self.cursor > 0:
            self.cursor <<= 1
            if self._past_width():
                self.cursor = 0

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[int, str]:
        if not self._started:
            self.start()
        else:
            self.advance()
        if not self.has_current():
            raise StopIteration
        return self.current_key(), self.current()

    def __repr__(self):
        return f"<FlagIterator mask={self.mask:#x} cursor={self.cursor:#x}>"
