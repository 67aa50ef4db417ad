"""Shared type definitions for resource and payload models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from dex_sdk.errors import InvalidResourceError

# Maximum u64 value
U64_MAX_INT = 2**64 - 1
# Maximum u128 value (reserves and supplies may be stored as u128)
U128_MAX_INT = 2**128 - 1


def validate_unsigned(value: Any, bound: int = U128_MAX_INT) -> str:
    """Validate that a value is an unsigned integer within ``bound``.

    Args:
        value: Value to validate (string or int)
        bound: Inclusive upper limit

    Returns:
        The integer as a decimal string

    Raises:
        ValueError: If value is not a non-negative integer within range
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsigned integer cannot be a bool: {value}")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Unsigned integer must be a decimal string: '{value}'") from err
    else:
        raise ValueError(f"Unsigned integer must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Unsigned integer cannot be negative: {value}")
    if int_value > bound:
        raise ValueError(f"Unsigned integer overflow: {value} > {bound}")
    return str(int_value)


def validate_u64(value: Any) -> str:
    return validate_unsigned(value, U64_MAX_INT)


# Move u64 as decimal string
U64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# Move u128 as decimal string
U128 = Annotated[
    str,
    BeforeValidator(validate_unsigned),
    Field(description="128-bit unsigned integer as decimal string"),
]


def decode_move_string(value: str) -> str:
    """Decode a hex-encoded Move ``vector<u8>`` string.

    The REST API renders ``TypeInfo`` module and struct names as ``0x``
    prefixed hex. Values without the prefix are returned unchanged.

    Raises:
        InvalidResourceError: If the hex is malformed or not UTF-8
    """
    if not value.startswith("0x"):
        return value
    try:
        return bytes.fromhex(value[2:]).decode("utf-8")
    except ValueError as err:
        raise InvalidResourceError(f"Invalid Move string: '{value}'") from err
