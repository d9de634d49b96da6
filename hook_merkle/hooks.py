# hooks.py

import itertools
import logging
from dataclasses import dataclass

from hook_merkle.addresses import ADDRESS_SIZE, AddressCatalog, Role, checksum
from hook_merkle.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArgumentSpec:
    name: str
    role: Role


@dataclass(frozen=True)
class HookSchema:
    """
    A deployed hook and the address arguments it is called with.
    `args` order defines both the combination order and the packing order.
    """

    name: str
    address: str | None
    args: tuple[ArgumentSpec, ...]

    def __post_init__(self):
        seen = set()
        for arg in self.args:
            if arg.name in seen:
                raise ConfigurationError(f"duplicate argument {arg.name!r} in hook {self.name}")
            seen.add(arg.name)


@dataclass(frozen=True)
class Leaf:
    hook_name: str
    args: dict[str, bytes]
    encoded: bytes


# ---- Default deployment ----
DEFAULT_HOOK_ADDRESSES = {
    "ApproveAndRedeem4626VaultHook": "0x66e1Ed81804cd6c574f18cA88123B3284868D845",
    "ApproveAndDeposit4626VaultHook": "0x95C5A10d9C6d27985b7bad85635060C0AEcBf356",
    "Redeem4626VaultHook": "0x7692d9e0d10799199c8285E4c99E1fBC5C64fBf3",
}

DEFAULT_HOOK_ARGS = {
    "ApproveAndRedeem4626VaultHook": (
        ArgumentSpec("yieldSource", Role.YIELD_SOURCE),
        ArgumentSpec("token", Role.TOKEN),
        ArgumentSpec("owner", Role.BENEFICIARY),
    ),
    "ApproveAndDeposit4626VaultHook": (
        ArgumentSpec("yieldSource", Role.YIELD_SOURCE),
        ArgumentSpec("token", Role.TOKEN),
    ),
    "Redeem4626VaultHook": (
        ArgumentSpec("yieldSource", Role.YIELD_SOURCE),
        ArgumentSpec("owner", Role.BENEFICIARY),
    ),
}


def default_hooks() -> list[HookSchema]:
    return [
        HookSchema(name, DEFAULT_HOOK_ADDRESSES[name], args)
        for name, args in DEFAULT_HOOK_ARGS.items()
    ]


def apply_address_overrides(hooks: list[HookSchema], addresses: list[str]) -> list[HookSchema]:
    """
    Map `addresses` positionally onto `hooks`. With fewer addresses than hooks
    the deployment defaults are kept; surplus addresses are ignored.
    """
    if len(addresses) < len(hooks):
        logger.warning(
            "Invalid number of hook addresses: expected %d, got %d. Using default hook addresses.",
            len(hooks), len(addresses),
        )
        return list(hooks)

    logger.info("Using provided hook addresses")
    overridden = []
    for hook, address in zip(hooks, addresses):
        address = checksum(address)
        logger.info("%s: %s", hook.name, address)
        overridden.append(HookSchema(hook.name, address, hook.args))
    return overridden


# ---- Expansion / encoding ----
def expand_args(schema: HookSchema, catalog: AddressCatalog, chain_id: int) -> list[dict[str, bytes]]:
    """
    Every combination of candidate addresses for the schema's arguments, first
    argument outermost. Arguments without candidates on this chain are left
    out of the combinations rather than emptying the product.
    """
    columns = []
    for arg in schema.args:
        candidates = catalog.addresses_for(arg.role, chain_id)
        if not candidates:
            logger.debug("%s: no %s candidates on chain %d, skipping %s",
                         schema.name, arg.role.value, chain_id, arg.name)
            continue
        columns.append((arg.name, candidates))

    if not columns:
        logger.warning("%s: no candidates for any argument on chain %d, emitting a single empty leaf",
                       schema.name, chain_id)

    names = [name for name, _ in columns]
    return [
        dict(zip(names, combo))
        for combo in itertools.product(*(candidates for _, candidates in columns))
    ]


def encode_args(args: dict[str, bytes], schema: HookSchema) -> bytes:
    """abi.encodePacked of the present address arguments, in declared order."""
    out = bytearray()
    for arg in schema.args:
        if arg.name not in args:
            continue
        value = args[arg.name]
        if len(value) != ADDRESS_SIZE:
            raise ValueError(f"{schema.name}.{arg.name}: expected {ADDRESS_SIZE}-byte address, got {len(value)}")
        out += value
    return bytes(out)


def hook_leaves(schema: HookSchema, catalog: AddressCatalog, chain_id: int) -> list[Leaf]:
    return [
        Leaf(schema.name, args, encode_args(args, schema))
        for args in expand_args(schema, catalog, chain_id)
    ]
