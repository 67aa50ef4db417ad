"""Unsigned transaction payload model."""

from typing import Literal

from pydantic import BaseModel, Field

from dex_sdk.constants import ENTRY_FUNCTION_PAYLOAD


class EntryFunctionPayload(BaseModel):
    """Call of an on-chain entry function, ready for signing.

    Serialize with ``model_dump(by_alias=True)`` to get the camelCase wire form.
    """

    type: Literal["entry_function_payload"] = ENTRY_FUNCTION_PAYLOAD
    function: str
    type_arguments: list[str] = Field(alias="typeArguments")
    arguments: list[str]

    model_config = {"populate_by_name": True}


__all__ = ["EntryFunctionPayload"]
