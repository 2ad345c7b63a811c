# errors.py
# exception types raised by the hole counter


class GlyphHolesError(Exception):
    """Base class for every error raised by glyphholes."""


class DecodeError(GlyphHolesError):
    """The source image could not be opened or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot decode image {path!r}: {reason}")


class InvalidShapeError(GlyphHolesError):
    """A shape has more holes than the classifier supports."""

    def __init__(self, hole_count: int, seed: tuple[int, int], max_holes: int):
        self.hole_count = hole_count
        self.seed = seed
        self.max_holes = max_holes
        super().__init__(
            f"input image is not valid: shape at (row={seed[0]}, col={seed[1]}) "
            f"has {hole_count} holes, at most {max_holes} are supported"
        )


class ConfigError(GlyphHolesError, ValueError):
    pass
