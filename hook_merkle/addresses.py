# addresses.py

from dataclasses import dataclass, field
from enum import Enum

from eth_utils import is_address, is_checksum_address, to_canonical_address, to_checksum_address

from hook_merkle.errors import ConfigurationError

ADDRESS_SIZE = 20


class Role(str, Enum):
    TOKEN = "token"
    YIELD_SOURCE = "yieldSource"
    BENEFICIARY = "beneficiary"

    @classmethod
    def parse(cls, value: str) -> "Role":
        if not isinstance(value, str):
            raise ConfigurationError(f"argument role must be a string, got {value!r}")
        key = value.strip()
        aliases = {
            "yield-source": cls.YIELD_SOURCE,
            "yield_source": cls.YIELD_SOURCE,
        }
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ConfigurationError(f"unknown argument role {value!r}") from None


# ---- Helpers ----
def address_bytes(value: str | bytes) -> bytes:
    """
    Normalize a hex address (any case, 0x optional) or raw 20 bytes to the
    canonical 20-byte form. Mixed-case input must carry a valid EIP-55 checksum.
    """
    if isinstance(value, bytes):
        if len(value) != ADDRESS_SIZE:
            raise ConfigurationError(f"expected {ADDRESS_SIZE}-byte address, got {len(value)} bytes")
        return value
    if not isinstance(value, str):
        raise ConfigurationError(f"address must be a string, got {type(value).__name__}")
    body = value.strip()
    if body.startswith(("0x", "0X")):
        body = body[2:]
    text = "0x" + body
    if not is_address(text):
        raise ConfigurationError(f"invalid address: {value!r}")
    # Mixed case means EIP-55; all-lower and all-upper carry no checksum.
    if body != body.lower() and body != body.upper() and not is_checksum_address(text):
        raise ConfigurationError(f"bad EIP-55 checksum: {value!r}")
    return to_canonical_address(text)


def checksum(value: str | bytes) -> str:
    return to_checksum_address(address_bytes(value))


@dataclass
class AddressCatalog:
    """Candidate addresses per role; tokens and yield sources are keyed by chain id."""

    tokens: dict[int, list[bytes]] = field(default_factory=dict)
    yield_sources: dict[int, list[bytes]] = field(default_factory=dict)
    beneficiaries: list[bytes] = field(default_factory=list)

    def addresses_for(self, role: Role, chain_id: int) -> list[bytes]:
        # Copies, so callers never mutate the catalog.
        if role is Role.TOKEN:
            return list(self.tokens.get(chain_id, []))
        if role is Role.YIELD_SOURCE:
            return list(self.yield_sources.get(chain_id, []))
        if role is Role.BENEFICIARY:
            return list(self.beneficiaries)
        return []
