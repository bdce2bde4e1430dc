"""Exceptions raised while decoding an object file.

Every one of them means "this input is not a valid object file"; none of them
can be recovered from within the same decode session."""


class ObjectFileError(ValueError):
    pass


class TruncatedInput(ObjectFileError, EOFError):
    """The stream ended in the middle of a field"""


class MagicNotFound(TruncatedInput):
    """The stream ended before the header magic was seen"""


class UnsupportedVersion(ObjectFileError):
    pass


class InvalidFooter(ObjectFileError):
    pass


class MalformedSection(ObjectFileError):
    """A section marker byte was neither 0xFE nor 0xFF"""
