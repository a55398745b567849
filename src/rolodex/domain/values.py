"""Value objects: immutable, self-validating scalar wrappers.

Each wrapper trims its raw input, validates it in __post_init__ and raises
ValidationError with the type's MESSAGE_CONSTRAINTS on bad input.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar
from urllib.parse import urlparse

from rolodex.domain.errors import ValidationError

NAME_MAX_LENGTH = 100
TAG_MAX_LENGTH = 50
RATING_MIN = 0
RATING_MAX = 10


def _require_str(value: object, type_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{type_name} must be text.")
    return value.strip()


@dataclass(frozen=True)
class Name:
    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Names should only contain letters, digits, spaces and the characters . ' -, "
        f"should start with a letter or digit and be at most {NAME_MAX_LENGTH} characters long."
    )
    _PATTERN: ClassVar[re.Pattern] = re.compile(r"[^\W_][\w .'\-]*")

    def __post_init__(self):
        name = " ".join(_require_str(self.value, "Name").split())
        if not self.is_valid(name):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", name)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return (
            len(value) <= NAME_MAX_LENGTH
            and cls._PATTERN.fullmatch(value) is not None
            and "_" not in value
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Phone:
    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Phone numbers should only contain digits, and it should be at least 3 digits long."
    )

    def __post_init__(self):
        phone = _require_str(self.value, "Phone")
        if not self.is_valid(phone):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", phone)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return re.fullmatch(r"[0-9]{3,}", value) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Emails should be of the format local-part@domain. "
        "The local-part should only contain alphanumeric characters and the characters + _ . -, "
        "and may not start or end with a special character. "
        "The domain is made up of labels separated by periods; each label starts and ends "
        "with an alphanumeric character, and the last label is at least 2 characters long."
    )
    _PATTERN: ClassVar[re.Pattern] = re.compile(
        r"[A-Za-z0-9](?:[A-Za-z0-9+_.\-]*[A-Za-z0-9])?"
        r"@"
        r"(?:[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?\.)*"
        r"[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])"
    )

    def __post_init__(self):
        email = _require_str(self.value, "Email")
        if not self.is_valid(email):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", email)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return cls._PATTERN.fullmatch(value) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address:
    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = "Addresses can take any values, and it should not be blank."

    def __post_init__(self):
        address = _require_str(self.value, "Address")
        if not self.is_valid(address):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", address)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(value.strip())

    def __str__(self) -> str:
        return self.value


STATUSES = (
    "Application Received",
    "OA in Progress",
    "Interview in Progress",
    "Application Withdrawn",
    "Application Accepted",
    "Rejected",
)
DEFAULT_STATUS = STATUSES[0]


@dataclass(frozen=True)
class Status:
    """Where the person is in the application pipeline. Stored in canonical casing."""

    value: str = DEFAULT_STATUS
    MESSAGE_CONSTRAINTS: ClassVar[str] = "Status should be one of: " + ", ".join(STATUSES) + "."

    def __post_init__(self):
        raw = " ".join(_require_str(self.value, "Status").split())
        canonical = self._canonical(raw)
        if canonical is None:
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", canonical)

    @staticmethod
    def _canonical(value: str) -> str | None:
        folded = value.casefold()
        for status in STATUSES:
            if status.casefold() == folded:
                return status
        return None

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return cls._canonical(" ".join(value.split())) is not None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Note:
    value: str = ""
    MESSAGE_CONSTRAINTS: ClassVar[str] = "Notes can take any values."

    def __post_init__(self):
        object.__setattr__(self, "value", _require_str(self.value, "Note"))

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return isinstance(value, str)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Rating:
    value: str = "0"
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        f"Rating should be a whole number from {RATING_MIN} to {RATING_MAX}."
    )

    def __post_init__(self):
        rating = _require_str(self.value, "Rating")
        if not self.is_valid(rating):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        # "07" and "7" are the same rating
        object.__setattr__(self, "value", str(int(rating)))

    @classmethod
    def is_valid(cls, value: str) -> bool:
        if not value.isascii() or not value.isdigit():
            return False
        return RATING_MIN <= int(value) <= RATING_MAX

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Link:
    value: str
    MESSAGE_CONSTRAINTS: ClassVar[str] = "Links should be absolute http or https URLs, e.g. https://github.com/alex."

    def __post_init__(self):
        link = _require_str(self.value, "Link")
        if not self.is_valid(link):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", link)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        if not value or any(c.isspace() for c in value):
            return False
        parsed = urlparse(value)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tag:
    """A single tag. Keeps the user's casing for display; compares case-insensitively."""

    value: str = field(compare=False)
    key: str = field(init=False, repr=False)
    MESSAGE_CONSTRAINTS: ClassVar[str] = (
        "Tags should start with a letter or digit and only contain letters, digits, spaces "
        f"and the characters + # . _ -, up to {TAG_MAX_LENGTH} characters."
    )
    _PATTERN: ClassVar[re.Pattern] = re.compile(r"[A-Za-z0-9][A-Za-z0-9 +#._\-]*")

    def __post_init__(self):
        tag = " ".join(_require_str(self.value, "Tag").split())
        if not self.is_valid(tag):
            raise ValidationError(self.MESSAGE_CONSTRAINTS)
        object.__setattr__(self, "value", tag)
        object.__setattr__(self, "key", tag.casefold())

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return len(value) <= TAG_MAX_LENGTH and cls._PATTERN.fullmatch(value) is not None

    def __str__(self) -> str:
        return self.value
