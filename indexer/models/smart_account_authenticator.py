"""SmartAccountAuthenticator model — one row per account x authenticator index."""

from sqlmodel import SQLModel, Field

from indexer.utils.constants import AUTHENTICATOR_VERSION


def authenticator_record_id(contract_address: str, authenticator_index: int) -> str:
    return f"{contract_address}-{authenticator_index}"


class SmartAccountAuthenticator(SQLModel, table=True):
    __tablename__ = "smart_account_authenticator"

    id: str = Field(primary_key=True)  # "{contract_address}-{authenticator_index}"
    account_id: str = Field(index=True)  # SmartAccount.id, not enforced
    type: str  # "Secp256K1", "Ed25519", "EthWallet", "Jwt", "Passkey"
    authenticator: str
    authenticator_index: int
    version: str = AUTHENTICATOR_VERSION
