"""First-fit heap allocator over a fixed byte arena with in-band boundary tags."""

import struct
from dataclasses import dataclass

HEAP_INITIAL_SIZE = 0x10000

_TAG = struct.Struct("<?7xQQ")
TAG_SIZE = _TAG.size


class HeapError(MemoryError):
    """Raised when an allocation cannot be satisfied or an address is invalid."""


@dataclass
class _Tag:
    offset: int
    next_reserved: bool
    prev_size: int
    next_size: int


class Heap:
    """A heap whose blocks are separated by tags recording neighbouring block sizes."""

    def __init__(self, size=HEAP_INITIAL_SIZE):
        if size < 2 * TAG_SIZE:
            raise ValueError(f"heap of {size} bytes cannot hold its boundary tags")
        self.memory = bytearray(size)
        self.capacity = size - 2 * TAG_SIZE
        self.allocated = 0
        self._store(_Tag(0, False, 0, self.capacity))
        self._store(_Tag(self.capacity + TAG_SIZE, False, self.capacity, 0))

    def _check_range(self, offset, size):
        if offset < 0 or size < 0 or offset + size > len(self.memory):
            raise HeapError(f"range {offset}+{size} lies outside the heap")

    def _load(self, offset):
        self._check_range(offset, TAG_SIZE)
        reserved, prev_size, next_size = _TAG.unpack_from(self.memory, offset)
        return _Tag(offset, reserved, prev_size, next_size)

    def _store(self, tag):
        _TAG.pack_into(
            self.memory, tag.offset, tag.next_reserved, tag.prev_size, tag.next_size
        )

    def _following(self, tag):
        return self._load(tag.offset + TAG_SIZE + tag.next_size)

    def alloc(self, size):
        """Reserve ``size`` zeroed bytes and return their address."""
        if size < 0:
            raise ValueError("allocation size must not be negative")
        self.allocated += size

        current = self._load(0)
        while current.next_reserved or (
            current.next_size <= size + TAG_SIZE and current.next_size != size
        ):
            current = self._following(current)
            if current.next_size == 0:
                raise HeapError(f"no free block for {size} bytes")

        if current.next_size != size:
            following = self._following(current)
            if current.next_size != following.prev_size:
                raise HeapError("heap tags are inconsistent")
            remaining = current.next_size - size - TAG_SIZE
            current.next_size = size
            middle = _Tag(current.offset + TAG_SIZE + size, False, size, remaining)
            following.prev_size = remaining
            self._store(middle)
            self._store(following)

        current.next_reserved = True
        self._store(current)

        start = current.offset + TAG_SIZE
        self.memory[start:start + size] = bytes(size)
        return start

    def free(self, address):
        """Release the block at ``address``, merging it with free neighbours.

        Freeing a block that is not reserved, or whose tags disagree, does nothing.
        """
        tag = self._load(address - TAG_SIZE)
        self.allocated -= tag.next_size

        if not tag.next_reserved:
            return

        following = self._following(tag)
        if tag.next_size != following.prev_size:
            return

        if not following.next_reserved and following.next_size != 0:
            tag.next_size += following.next_size + TAG_SIZE
            following = self._following(following)

        following.prev_size = tag.next_size

        if tag.prev_size != 0:
            previous = self._load(tag.offset - tag.prev_size - TAG_SIZE)
            if not previous.next_reserved:
                previous.next_size += tag.next_size + TAG_SIZE
                following.prev_size = previous.next_size
                self._store(tag)
                self._store(previous)
                self._store(following)
                return

        tag.next_reserved = False
        self._store(tag)
        self._store(following)

    def realloc(self, address, size):
        """Move the block at ``address`` to a new block of ``size`` bytes.

        As many bytes as both blocks can hold are copied across.
        """
        old = self._load(address - TAG_SIZE)
        new_address = self.alloc(size)
        count = min(old.next_size, size)
        self.memory[new_address:new_address + count] = self.memory[
            address:address + count
        ]
        self.free(address)
        return new_address

    def read(self, address, size):
        """Return ``size`` bytes starting at ``address``."""
        self._check_range(address, size)
        return bytes(self.memory[address:address + size])

    def write(self, address, data):
        """Store ``data`` starting at ``address``."""
        self._check_range(address, len(data))
        self.memory[address:address + len(data)] = data