# src/lexcount/core/buffer.py
from typing import BinaryIO, Optional

class BufferAllocationError(MemoryError):
    """The content buffer could not be sized for the next file."""

    def __init__(self, requested: Optional[int], capacity: int):
        if requested is None:
            message = f"Memory allocation failed while reading past {capacity} bytes"
        else:
            message = f"Memory allocation of {requested} bytes failed"
        super().__init__(f"{message} (buffer capacity was {capacity} bytes)")
        self.requested = requested
        self.capacity = capacity

class ContentBuffer:
    """
    Reusable byte storage holding one file's content at a time.

    `capacity` is the size of the underlying bytearray; only the first
    `len(buffer)` bytes belong to the current file. Anything past that is
    never handed out, so a smaller file cannot leak a larger file's bytes.
    """

    def __init__(self):
        self._data = bytearray()
        self._length = 0

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytearray:
        return self._data

    def clear(self) -> None:
        """Drops the logical content; the capacity is kept."""
        self._length = 0

    def _allocate(self, size: int) -> bytearray:
        return bytearray(size)

    def _shrink(self, capacity: int) -> None:
        # Halve in place; truncating needs no new allocation
        del self._data[-(-capacity // 2):]
        self._length = 0

    def reserve_exact(self, size: int) -> None:
        """
        Resizes the storage to exactly `size` bytes.

        On allocation failure the storage is shrunk to half of its previous
        capacity to relieve memory pressure and BufferAllocationError is raised.
        """
        capacity = len(self._data)
        if size == capacity:
            return
        try:
            data = self._allocate(size)
        except (MemoryError, OverflowError) as e:
            self._shrink(capacity)
            raise BufferAllocationError(size, capacity) from e
        self._data = data
        self._length = 0

    def fill_from(self, f: BinaryIO) -> int:
        """
        Reads `f` to the end, starting at offset 0 of the buffer.
        Storage grows only if the file is longer than the reserved capacity.
        """
        total = 0
        with memoryview(self._data) as view:
            while total < len(view):
                n = f.readinto(view[total:])
                if not n:
                    break
                total += n

        if total == len(self._data):
            capacity = len(self._data)
            try:
                rest = f.read()
                if rest:
                    self._data += rest
            except MemoryError as e:
                self._shrink(capacity)
                raise BufferAllocationError(None, capacity) from e
            total += len(rest)

        self._length = total
        return total
