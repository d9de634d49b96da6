import pytest

from hook_merkle.addresses import AddressCatalog, Role
from hook_merkle.hooks import ArgumentSpec, HookSchema

YS_A = bytes.fromhex("aa" * 20)
YS_B = bytes.fromhex("bb" * 20)
OWNER_C = bytes.fromhex("cc" * 20)
TOKEN_D = bytes.fromhex("dd" * 20)
TOKEN_E = bytes.fromhex("ee" * 20)

HOOK_ADDRESS = "0x" + "11" * 20


@pytest.fixture
def catalog():
    return AddressCatalog(
        tokens={1: [TOKEN_D, TOKEN_E]},
        yield_sources={1: [YS_A, YS_B]},
        beneficiaries=[OWNER_C],
    )


@pytest.fixture
def redeem_hook():
    return HookSchema(
        "H",
        HOOK_ADDRESS,
        (ArgumentSpec("yieldSource", Role.YIELD_SOURCE), ArgumentSpec("owner", Role.BENEFICIARY)),
    )


@pytest.fixture
def targets_dir(tmp_path):
    """A targets directory in the layout written by the deployment scripts."""
    d = tmp_path / "target"
    d.mkdir()
    (d / "token_list.json").write_text(
        '{"1": [{"address": "0x' + "dd" * 20 + '", "symbol": "D"}, {"address": "0x' + "ee" * 20 + '"}]}'
    )
    (d / "yield_sources_list.json").write_text(
        '{"1": [{"address": "0x' + "aa" * 20 + '"}, {"address": "0x' + "bb" * 20 + '"}], "8453": []}'
    )
    (d / "owner_list.json").write_text('["0x' + "cc" * 20 + '"]')
    return d
