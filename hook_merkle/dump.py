# dump.py

import logging

from hook_merkle.addresses import AddressCatalog
from hook_merkle.errors import ConfigurationError
from hook_merkle.hooks import HookSchema, Leaf, hook_leaves
from hook_merkle.merkle import StandardMerkleTree, to_hex

logger = logging.getLogger(__name__)


def collect_leaves(hooks: list[HookSchema], catalog: AddressCatalog, chain_id: int) -> list[Leaf]:
    """All hooks' leaves, concatenated in hook order."""
    leaves: list[Leaf] = []
    for hook in hooks:
        batch = hook_leaves(hook, catalog, chain_id)
        logger.info("Generated %d leaves for %s", len(batch), hook.name)
        leaves.extend(batch)
    return leaves


def build_root_artifact(tree: StandardMerkleTree) -> dict:
    return {"root": to_hex(tree.root)}


def build_tree_dump(tree: StandardMerkleTree, leaves: list[Leaf], hooks: list[HookSchema]) -> dict:
    """
    The tree's standard dump, with `count` and every value annotated with its
    hook, the hook's deployed address, the packed arguments and the proof.
    `leaves[i]` must be the leaf behind `tree.values[i]`.
    """
    if len(leaves) != len(tree):
        raise ValueError(f"expected metadata for {len(tree)} leaves, got {len(leaves)}")

    by_name = {hook.name: hook for hook in hooks}
    dump = tree.dump()
    dump["count"] = len(leaves)

    for i, value in tree.entries():
        leaf = leaves[i]
        hook = by_name.get(leaf.hook_name)
        if hook is None:
            raise ConfigurationError(f"Hook definition not found for {leaf.hook_name}")
        if not hook.address:
            raise ConfigurationError(f"Hook address not found for {leaf.hook_name}")

        dump["values"][i] = {
            "value": [to_hex(value)],
            "treeIndex": tree.values[i].tree_index,
            "hookName": leaf.hook_name,
            "hookAddress": hook.address,
            "encodedHookArgs": to_hex(leaf.encoded),
            "proof": [to_hex(p) for p in tree.get_proof(i)],
        }
    return dump


def generate_artifacts(
    hooks: list[HookSchema],
    catalog: AddressCatalog,
    chain_id: int,
) -> tuple[dict, dict] | None:
    """
    Build the global tree for one chain.
    Returns (root artifact, tree dump), or None when no hook has any leaf.
    """
    logger.info("Generating global Merkle tree for chain ID %d...", chain_id)
    leaves = collect_leaves(hooks, catalog, chain_id)
    if not leaves:
        logger.info("No leaves for chain ID %d, skipping tree", chain_id)
        return None

    tree = StandardMerkleTree.of([leaf.encoded for leaf in leaves])
    root = build_root_artifact(tree)
    dump = build_tree_dump(tree, leaves, hooks)
    logger.info("Global Merkle tree root: %s (%d leaves)", root["root"], len(leaves))
    return root, dump
