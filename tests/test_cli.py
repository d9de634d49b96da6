"""End-to-end tests for the generate-hook-merkle-trees entry point."""

import json
import logging

from eth_utils import to_checksum_address

from hook_merkle.cli import EXIT_CONFIGURATION_ERROR, EXIT_SUCCESS, main
from hook_merkle.config import load_catalog
from hook_merkle.dump import generate_artifacts
from hook_merkle.hooks import DEFAULT_HOOK_ADDRESSES, default_hooks
from hook_merkle.merkle import StandardMerkleTree


def _run(targets_dir, out_dir, *extra):
    return main([*extra, "--targets-dir", str(targets_dir), "--out-dir", str(out_dir), "--log-level", "WARNING"])


class TestMain:
    def test_writes_root_and_dump(self, targets_dir, tmp_path, capsys):
        out_dir = tmp_path / "output"
        assert _run(targets_dir, out_dir) == EXIT_SUCCESS

        root = json.loads((out_dir / "root_1.json").read_text())
        dump = json.loads((out_dir / "treeDump_1.json").read_text())
        expected_root, expected_dump = generate_artifacts(default_hooks(), load_catalog(targets_dir), 1)
        assert root == expected_root
        assert dump == expected_dump
        assert dump["count"] == 10
        StandardMerkleTree.load(dump).validate()
        assert "✅ Wrote" in capsys.readouterr().out

    def test_compact_json(self, targets_dir, tmp_path):
        out_dir = tmp_path / "output"
        _run(targets_dir, out_dir)
        text = (out_dir / "root_1.json").read_text()
        assert text.startswith('{"root":"0x')
        assert " " not in text

    def test_two_runs_identical(self, targets_dir, tmp_path):
        _run(targets_dir, tmp_path / "a")
        _run(targets_dir, tmp_path / "b")
        for name in ("root_1.json", "treeDump_1.json"):
            assert (tmp_path / "a" / name).read_bytes() == (tmp_path / "b" / name).read_bytes()

    def test_hook_address_override(self, targets_dir, tmp_path):
        addresses = ["0x" + c * 40 for c in "123"]
        out_dir = tmp_path / "output"
        assert _run(targets_dir, out_dir, ",".join(addresses)) == EXIT_SUCCESS

        dump = json.loads((out_dir / "treeDump_1.json").read_text())
        by_hook = {v["hookName"]: v["hookAddress"] for v in dump["values"]}
        assert by_hook["ApproveAndRedeem4626VaultHook"] == to_checksum_address(addresses[0])
        assert by_hook["Redeem4626VaultHook"] == to_checksum_address(addresses[2])

    def test_short_override_uses_defaults(self, targets_dir, tmp_path):
        out_dir = tmp_path / "output"
        assert _run(targets_dir, out_dir, "0x" + "1" * 40) == EXIT_SUCCESS

        dump = json.loads((out_dir / "treeDump_1.json").read_text())
        for v in dump["values"]:
            assert v["hookAddress"] == DEFAULT_HOOK_ADDRESSES[v["hookName"]]

    def test_blank_override_list_warns(self, targets_dir, tmp_path, caplog):
        out_dir = tmp_path / "output"
        with caplog.at_level(logging.WARNING, logger="hook_merkle.hooks"):
            assert _run(targets_dir, out_dir, ",") == EXIT_SUCCESS
        assert "Using default hook addresses" in caplog.text

        dump = json.loads((out_dir / "treeDump_1.json").read_text())
        for v in dump["values"]:
            assert v["hookAddress"] == DEFAULT_HOOK_ADDRESSES[v["hookName"]]

    def test_multiple_chains(self, targets_dir, tmp_path):
        out_dir = tmp_path / "output"
        assert _run(targets_dir, out_dir, "--chain-id", "1", "--chain-id", "8453") == EXIT_SUCCESS
        dump = json.loads((out_dir / "treeDump_8453.json").read_text())
        # No tokens or yield sources on 8453: the owner-taking hooks keep one leaf each
        # and ApproveAndDeposit4626VaultHook collapses to a single empty leaf.
        assert dump["count"] == 3
        assert sorted(v["encodedHookArgs"] for v in dump["values"]) == ["0x", "0x" + "cc" * 20, "0x" + "cc" * 20]
        assert (out_dir / "root_1.json").exists()

    def test_configuration_error_writes_nothing(self, targets_dir, tmp_path, capsys):
        out_dir = tmp_path / "output"
        code = _run(targets_dir, out_dir, "0x1234,0x" + "2" * 40 + ",0x" + "3" * 40)
        assert code == EXIT_CONFIGURATION_ERROR
        assert not out_dir.exists()
        assert "Error:" in capsys.readouterr().err

    def test_missing_targets(self, tmp_path):
        out_dir = tmp_path / "output"
        assert _run(tmp_path / "nowhere", out_dir) == EXIT_CONFIGURATION_ERROR
        assert not out_dir.exists()

    def test_malformed_catalog_is_reported(self, targets_dir, tmp_path, capsys):
        (targets_dir / "token_list.json").write_text('{"1": 5}')
        out_dir = tmp_path / "output"
        assert _run(targets_dir, out_dir) == EXIT_CONFIGURATION_ERROR
        assert not out_dir.exists()
        assert "Error:" in capsys.readouterr().err
