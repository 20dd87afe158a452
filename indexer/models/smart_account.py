"""SmartAccount model — one row per smart account contract."""

from sqlmodel import SQLModel, Field


class SmartAccount(SQLModel, table=True):
    __tablename__ = "smart_account"

    id: str = Field(primary_key=True)  # contract address
    latest_authenticator_id: int = 0  # highest authenticator index seen, never lowered
