"""Exception types raised while reading a keymap.c file."""


class KeymapError(Exception):
    """Base class for all keymap parsing failures.

    Attributes:
        layer: Index of the layer being parsed when the error occurred, if known
    """

    def __init__(self, message: str, layer: int | None = None):
        super().__init__(message)
        self.message = message
        self.layer = layer

    def with_layer(self, layer: int) -> "KeymapError":
        """Attach layer context unless the error already carries one."""
        if self.layer is None:
            self.layer = layer
        return self

    def __str__(self) -> str:
        if self.layer is None:
            return self.message
        return f"layer {self.layer}: {self.message}"


class StructureError(KeymapError):
    """The keymaps array literal is missing or not well formed."""


class KeymapSyntaxError(KeymapError):
    """A macro call or argument inside a layer is malformed."""

    def __init__(self, message: str, token: str | None = None, layer: int | None = None):
        super().__init__(message, layer)
        self.token = token

    def __str__(self) -> str:
        text = super().__str__()
        if self.token is not None:
            text += f": {self.token!r}"
        return text


class LayoutMismatchError(KeymapError):
    """A layer does not supply one binding per physical slot."""

    def __init__(self, expected: int, actual: int, layer: int | None = None):
        super().__init__(f"expected {expected} keys, got {actual}", layer)
        self.expected = expected
        self.actual = actual
