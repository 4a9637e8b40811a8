from typing import Annotated

from pydantic import AfterValidator


def is_not_empty_string(value: str) -> str:
    if not value:
        raise ValueError("Argument must not be an empty string")
    return value

NonEmptyString = Annotated[str, AfterValidator(is_not_empty_string)]


def is_positive_int(value: int) -> int:
    if value <= 0:
        raise ValueError("Argument must be a positive whole number")
    return value

PositiveInt = Annotated[int, AfterValidator(is_positive_int)]
