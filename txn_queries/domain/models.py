"""
Domain models for the transaction query engine.

Defines the transaction record as it arrives from the source JSON export. Field
aliases follow the export's camelCase keys (`mtn`, `senderFullName`, ...), while
Python code uses the snake_case attribute names.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class Transaction(BaseModel):
    """
    A single money transfer and the compliance issue attached to it.

    Two transactions are equal when their ids are equal; every other field is
    ignored for equality and hashing. The source data may contain several records
    sharing an id, which count as the same logical transaction.
    """

    id: str = Field(..., alias="mtn", description="Unique transaction identifier.")
    amount: float = Field(..., description="Transferred amount.")
    sender_name: str = Field(..., alias="senderFullName", description="Sender full name.")
    sender_age: int = Field(0, alias="senderAge", description="Sender age.")
    beneficiary_name: str = Field(
        ..., alias="beneficiaryFullName", description="Beneficiary full name."
    )
    beneficiary_age: int = Field(0, alias="beneficiaryAge", description="Beneficiary age.")
    issue_id: int = Field(0, alias="issueId", description="Compliance issue identifier.")
    issue_solved: bool = Field(..., alias="issueSolved", description="Whether the issue is solved.")
    issue_message: Optional[str] = Field(
        None, alias="issueMessage", description="Free-text issue description."
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        # Exports carry mtn as a JSON number.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("issue_id", "sender_age", "beneficiary_age", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


__all__ = ["Transaction"]
