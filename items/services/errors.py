from __future__ import annotations

from django.core.exceptions import ValidationError


class InvalidIndex(ValidationError):
    """Move position outside ``[0, length)``; nothing was mutated."""

    def __init__(self, index: int, length: int):
        super().__init__(
            f"Index {index} is out of range for {length} items",
            code="invalid_index",
        )
        self.index = index
        self.length = length


class MalformedInput(ValidationError):
    """Request data rejected before it reaches the order or selection state."""

    def __init__(self, message, code: str = "malformed_input"):
        super().__init__(message, code=code)
