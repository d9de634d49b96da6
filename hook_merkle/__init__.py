from hook_merkle.addresses import AddressCatalog, Role
from hook_merkle.dump import build_tree_dump, collect_leaves, generate_artifacts
from hook_merkle.errors import ConfigurationError
from hook_merkle.hooks import ArgumentSpec, HookSchema, Leaf, encode_args, expand_args
from hook_merkle.merkle import StandardMerkleTree, leaf_hash, verify

__version__ = "0.1.0"
