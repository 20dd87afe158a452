"""Shared constants for smart account events and records."""

# Event attribute keys
CONTRACT_ADDRESS_KEY = "_contract_address"
AUTHENTICATOR_ID_KEY = "authenticator_id"
AUTHENTICATOR_KEY = "authenticator"

# Event types emitted by the smart account contract
CREATE_ACCOUNT_EVENT = "wasm-create_abstract_account"
ADD_AUTH_METHOD_EVENT = "wasm-add_auth_method"
REMOVE_AUTH_METHOD_EVENT = "wasm-remove_auth_method"

# Schema tag written on every authenticator record
AUTHENTICATOR_VERSION = "v1"
