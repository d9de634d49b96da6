# config.py
"""
Loading of the generator's inputs: the address catalogs written by the
deployment scripts (JSON under the targets directory) and, optionally, a TOML
file replacing the built-in hook definitions.

Example hooks file:

    [[hooks]]
    name = "Redeem4626VaultHook"
    address = "0x7692d9e0d10799199c8285E4c99E1fBC5C64fBf3"

    [[hooks.args]]
    name = "yieldSource"
    role = "yieldSource"

    [[hooks.args]]
    name = "owner"
    role = "beneficiary"
"""

import json
import logging
from pathlib import Path

import toml

from hook_merkle.addresses import AddressCatalog, Role, address_bytes, checksum
from hook_merkle.errors import ConfigurationError
from hook_merkle.hooks import ArgumentSpec, HookSchema

logger = logging.getLogger(__name__)

TOKEN_LIST = "token_list.json"
YIELD_SOURCES_LIST = "yield_sources_list.json"
OWNER_LIST = "owner_list.json"


def _read_json(path: Path):
    if not path.exists():
        raise ConfigurationError(f"missing catalog file: {path}")
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"malformed catalog file {path}: {e}") from e


def _chain_keyed_addresses(data, source: Path) -> dict[int, list[bytes]]:
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source}: expected an object keyed by chain id")
    out: dict[int, list[bytes]] = {}
    for chain_id, items in data.items():
        try:
            key = int(chain_id)
        except ValueError:
            raise ConfigurationError(f"{source}: invalid chain id {chain_id!r}") from None
        if items is None:
            items = []
        if not isinstance(items, list):
            raise ConfigurationError(f"{source}: expected a list of entries on chain {chain_id}")
        addresses = []
        for item in items:
            if not isinstance(item, dict) or "address" not in item:
                raise ConfigurationError(f"{source}: entry without address on chain {chain_id}")
            addresses.append(address_bytes(item["address"]))
        out[key] = addresses
    return out


def load_catalog(targets_dir: str | Path) -> AddressCatalog:
    targets_dir = Path(targets_dir)
    tokens = _chain_keyed_addresses(_read_json(targets_dir / TOKEN_LIST), targets_dir / TOKEN_LIST)
    yield_sources = _chain_keyed_addresses(
        _read_json(targets_dir / YIELD_SOURCES_LIST), targets_dir / YIELD_SOURCES_LIST
    )

    owners = _read_json(targets_dir / OWNER_LIST)
    if not isinstance(owners, list):
        raise ConfigurationError(f"{targets_dir / OWNER_LIST}: expected a list of addresses")
    beneficiaries = [address_bytes(a) for a in owners]

    logger.debug(
        "Loaded catalog from %s: %d token chains, %d yield source chains, %d beneficiaries",
        targets_dir, len(tokens), len(yield_sources), len(beneficiaries),
    )
    return AddressCatalog(tokens=tokens, yield_sources=yield_sources, beneficiaries=beneficiaries)


def hooks_from_config(data: dict) -> list[HookSchema]:
    entries = data.get("hooks")
    if not entries:
        raise ConfigurationError("hooks config defines no [[hooks]]")
    if not isinstance(entries, list):
        raise ConfigurationError("hooks must be an array of tables ([[hooks]]), not a single table")

    hooks = []
    names = set()
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigurationError(f"hook entry must be a table, got {entry!r}")
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ConfigurationError("hook entry without a name")
        if name in names:
            raise ConfigurationError(f"hook {name} defined twice")
        names.add(name)

        address = entry.get("address")
        args = []
        arg_entries = entry.get("args", [])
        if not isinstance(arg_entries, list):
            raise ConfigurationError(f"{name}: args must be an array of tables")
        for arg in arg_entries:
            if not isinstance(arg, dict) or "name" not in arg or "role" not in arg:
                raise ConfigurationError(f"{name}: argument entries need a name and a role")
            args.append(ArgumentSpec(arg["name"], Role.parse(arg["role"])))
        hooks.append(HookSchema(name, checksum(address) if address else None, tuple(args)))
    return hooks


def load_hooks(path: str | Path) -> list[HookSchema]:
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"missing hooks config: {path}")
    try:
        data = toml.load(path)
    except toml.TomlDecodeError as e:
        raise ConfigurationError(f"malformed hooks config {path}: {e}") from e
    return hooks_from_config(data)


def parse_address_list(value: str | None) -> list[str]:
    """Split a comma-separated address override list. Blank positions are kept."""
    if value is None:
        return []
    return [a.strip() for a in value.split(",")]
