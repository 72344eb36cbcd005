"""HTTP request and response models.

Field names are snake_case in Python and camelCase on the wire.
"""

import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cashcount.domain.entities import (
    DenominationAmount,
    DenominationCount,
    Denomination,
    Statement,
    StatementView,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Requests ---------------------------------------------------------------


class CredentialsRequest(BaseModel):
    email: str = Field(min_length=1, examples=["user@example.com"])
    password: str = Field(min_length=1)


class DenominationDetailIn(CamelModel):
    denomination_id: int = Field(examples=[1])
    quantity: int = Field(ge=0, examples=[5])

    def to_domain(self) -> DenominationCount:
        return DenominationCount(denomination_id=self.denomination_id, quantity=self.quantity)


class StatementCreateRequest(CamelModel):
    store_name: str = Field(min_length=1, examples=["Main Street"])
    date: datetime.date
    total_amount: Decimal = Field(examples=["500.00"])
    notes: Optional[str] = None
    denomination_details: list[DenominationDetailIn] = Field(default_factory=list)


class DenominationAmountIn(CamelModel):
    value: Decimal = Field(gt=0, examples=["100"])
    quantity: int = Field(ge=0, examples=[5])
    total: Optional[Decimal] = None

    def to_domain(self) -> DenominationAmount:
        return DenominationAmount(value=self.value, quantity=self.quantity, total=self.total)


class StatementUpdateRequest(CamelModel):
    store_name: str = Field(min_length=1)
    date: datetime.date
    total_amount: Decimal
    notes: Optional[str] = None
    denominations: list[DenominationAmountIn] = Field(default_factory=list)


# ---- Responses --------------------------------------------------------------


class UserOut(BaseModel):
    id: int
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class LoginResponse(BaseModel):
    message: str
    token: str


class ProfileResponse(BaseModel):
    profile: UserOut


class MessageResponse(BaseModel):
    message: str


class DenominationOut(BaseModel):
    id: int
    value: Decimal

    @classmethod
    def from_domain(cls, denomination: Denomination) -> "DenominationOut":
        return cls(id=denomination.id, value=denomination.value)


class StatementLineOut(CamelModel):
    denomination_id: int
    value: Decimal
    quantity: int
    total: Decimal


class StatementHeaderOut(CamelModel):
    id: int
    user_id: int
    store_name: str
    date: datetime.date
    total_amount: Decimal
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, statement: Statement) -> "StatementHeaderOut":
        return cls(
            id=statement.id,
            user_id=statement.owner_id,
            store_name=statement.store_name,
            date=statement.date,
            total_amount=statement.total_amount,
            notes=statement.notes,
        )


class StatementOut(StatementHeaderOut):
    denominations: list[StatementLineOut] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: StatementView) -> "StatementOut":
        header = StatementHeaderOut.from_domain(view.statement)
        return cls(
            **header.model_dump(),
            denominations=[
                StatementLineOut(
                    denomination_id=line.denomination_id,
                    value=line.value,
                    quantity=line.quantity,
                    total=line.total,
                )
                for line in view.lines
            ],
        )


class StatementCreatedResponse(CamelModel):
    message: str
    statement_id: int


class StatementDeletedResponse(BaseModel):
    message: str
    statement: StatementHeaderOut


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: Optional[list[dict]] = None
