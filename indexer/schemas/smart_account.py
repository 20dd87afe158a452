"""Pydantic schemas for the smart account query API."""

from pydantic import BaseModel


class SmartAccountAuthenticatorRead(BaseModel):
    id: str
    account_id: str
    type: str
    authenticator: str
    authenticator_index: int
    version: str

    model_config = {"from_attributes": True}


class SmartAccountRead(BaseModel):
    id: str
    latest_authenticator_id: int

    model_config = {"from_attributes": True}


class SmartAccountDetail(SmartAccountRead):
    authenticators: list[SmartAccountAuthenticatorRead] = []


class EventBatchResult(BaseModel):
    received: int
    processed: int
