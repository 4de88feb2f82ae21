"""Exceptions raised by the shadow-hours core."""


class ShadowHoursError(Exception):
    """Base class for shadow-hours errors."""


class InputEmptyError(ShadowHoursError, ValueError):
    """Required calendar text is missing or blank."""


class DateParseError(ShadowHoursError, ValueError):
    """A date header could not be converted to a calendar date."""

    def __init__(self, date_string: str):
        self.date_string = date_string
        super().__init__(f"Cannot parse date header '{date_string}'")


class ReferenceLoadError(ShadowHoursError):
    """The reference table is unreadable or holds no usable rows."""
