# cli.py
import argparse
import json
import logging
import sys
from pathlib import Path

from hook_merkle.config import load_catalog, load_hooks, parse_address_list
from hook_merkle.dump import generate_artifacts
from hook_merkle.errors import ConfigurationError
from hook_merkle.hooks import apply_address_overrides, default_hooks

EXIT_SUCCESS = 0
EXIT_CONFIGURATION_ERROR = 1


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def write_json(data: dict, out_path: Path) -> None:
    # Compact, key order preserved, same bytes as JSON.stringify.
    out_path.write_text(json.dumps(data, separators=(",", ":")))
    print(f"✅ Wrote {out_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-hook-merkle-trees",
        description="Build the global hook Merkle tree and per-leaf proofs",
    )
    parser.add_argument(
        "hook_addresses", nargs="?",
        help="comma-separated hook addresses, one per hook in definition order",
    )
    parser.add_argument("--chain-id", type=int, action="append", dest="chain_ids",
                        help="chain id to build a tree for (repeatable, default 1)")
    parser.add_argument("--targets-dir", default="target",
                        help="directory holding token_list.json, yield_sources_list.json, owner_list.json")
    parser.add_argument("--hooks-config", help="TOML file replacing the built-in hook definitions")
    parser.add_argument("--out-dir", default="output", help="output directory")
    parser.add_argument("--log-level", default="INFO")
    return parser


def run(args: argparse.Namespace) -> int:
    hooks = load_hooks(args.hooks_config) if args.hooks_config else default_hooks()
    if args.hook_addresses is not None:
        hooks = apply_address_overrides(hooks, parse_address_list(args.hook_addresses))

    catalog = load_catalog(args.targets_dir)
    chain_ids = args.chain_ids or [1]

    # Everything is built before the first write, so a failure leaves no partial output.
    artifacts = {}
    for chain_id in chain_ids:
        result = generate_artifacts(hooks, catalog, chain_id)
        if result is not None:
            artifacts[chain_id] = result

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for chain_id, (root, dump) in artifacts.items():
        write_json(root, out_dir / f"root_{chain_id}.json")
        write_json(dump, out_dir / f"treeDump_{chain_id}.json")
        print(f"Saved global Merkle tree with root: {root['root']}")
        print(f"Total leaves in global tree: {dump['count']}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return run(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
