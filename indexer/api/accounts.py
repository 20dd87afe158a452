"""Smart account query API."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from indexer.database import get_session
from indexer.models.smart_account import SmartAccount
from indexer.models.smart_account_authenticator import SmartAccountAuthenticator
from indexer.schemas.smart_account import (
    SmartAccountAuthenticatorRead,
    SmartAccountDetail,
    SmartAccountRead,
)

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


def _list_authenticators(session: Session, address: str) -> list[SmartAccountAuthenticator]:
    stmt = (
        select(SmartAccountAuthenticator)
        .where(SmartAccountAuthenticator.account_id == address)
        .order_by(SmartAccountAuthenticator.authenticator_index)
    )
    return list(session.exec(stmt).all())


@router.get("", response_model=list[SmartAccountRead])
def list_accounts(
    limit: int = 100,
    offset: int = 0,
    session: Session = Depends(get_session),
):
    stmt = select(SmartAccount).order_by(SmartAccount.id).offset(offset).limit(limit)
    return session.exec(stmt).all()


@router.get("/{address}", response_model=SmartAccountDetail)
def get_account(address: str, session: Session = Depends(get_session)):
    account = session.get(SmartAccount, address)
    if not account:
        raise HTTPException(status_code=404, detail="Smart account not found")
    return SmartAccountDetail(
        id=account.id,
        latest_authenticator_id=account.latest_authenticator_id,
        authenticators=[
            SmartAccountAuthenticatorRead.model_validate(a)
            for a in _list_authenticators(session, address)
        ],
    )


@router.get("/{address}/authenticators", response_model=list[SmartAccountAuthenticatorRead])
def list_account_authenticators(address: str, session: Session = Depends(get_session)):
    if not session.get(SmartAccount, address):
        raise HTTPException(status_code=404, detail="Smart account not found")
    return _list_authenticators(session, address)
