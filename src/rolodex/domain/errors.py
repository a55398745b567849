"""Error taxonomy. Every error carries a message meant for the person at the keyboard."""


class RolodexError(Exception):
    """Base class for every error surfaced to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(RolodexError):
    """Malformed or unknown command, or malformed argument."""


class ValidationError(RolodexError, ValueError):
    """A value object rejected its raw input."""


# --- duplicates ---


class DuplicateError(RolodexError):
    pass


class DuplicatePersonError(DuplicateError):
    def __init__(self, message: str = "This person already exists in the contact book.") -> None:
        super().__init__(message)


class DuplicateTagError(DuplicateError):
    pass


class DuplicateTagTypeError(DuplicateError):
    pass


# --- lookups ---


class NotFoundError(RolodexError):
    pass


class InvalidIndexError(NotFoundError):
    def __init__(self, message: str = "The person index provided is invalid.") -> None:
        super().__init__(message)


class PersonNotFoundError(NotFoundError):
    pass


class TagNotFoundError(NotFoundError):
    pass


class TagTypeNotFoundError(NotFoundError):
    pass


class UnknownPrefixError(NotFoundError):
    pass


# --- storage ---


class StorageError(RolodexError):
    """Persistence or export failure."""


class DataLoadingError(StorageError):
    pass


class MissingFieldError(DataLoadingError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"Person's {field_name} field is missing!")
        self.field_name = field_name


class SaveFailedError(StorageError):
    pass


class ExportFailedError(StorageError):
    def __init__(
        self, message: str = "Couldn't export file! Check file path and try again!"
    ) -> None:
        super().__init__(message)
