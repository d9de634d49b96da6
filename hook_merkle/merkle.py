# merkle.py
"""
OpenZeppelin-compatible StandardMerkleTree over single `bytes` leaves.

Matches `@openzeppelin/merkle-tree` v1 ("standard-v1" dumps) and the
`MerkleProof` library on-chain:
  leaf = keccak256(keccak256(abi.encode(bytes value)))
  node = keccak256(sorted(left, right))
The tree is a flat array of 2n-1 nodes with leaves sorted by hash and stored
from the end of the array; node k has children 2k+1 and 2k+2.
"""

from dataclasses import dataclass

from eth_hash.auto import keccak

DUMP_FORMAT = "standard-v1"
LEAF_ENCODING = ["bytes"]


# ---- Helpers ----
def keccak256(b: bytes) -> bytes:
    return keccak(b)

def u256_be(n: int) -> bytes:
    return n.to_bytes(32, "big")

def to_hex(b: bytes) -> str:
    return "0x" + b.hex()

def from_hex(s: str) -> bytes:
    return bytes.fromhex(s.removeprefix("0x"))

def abi_encode_bytes(value: bytes) -> bytes:
    """abi.encode(["bytes"], [value]): head offset | length | data padded to 32."""
    padding = b"\x00" * (-len(value) % 32)
    return u256_be(32) + u256_be(len(value)) + value + padding

def leaf_hash(value: bytes) -> bytes:
    return keccak256(keccak256(abi_encode_bytes(value)))

def hash_pair(a: bytes, b: bytes) -> bytes:
    if a < b:
        return keccak256(a + b)
    return keccak256(b + a)

def process_proof(leaf: bytes, proof: list[bytes]) -> bytes:
    h = leaf
    for sibling in proof:
        h = hash_pair(h, sibling)
    return h

def verify(root: bytes, leaf: bytes, proof: list[bytes]) -> bool:
    return process_proof(leaf, proof) == root


# ---- Flat tree layout ----
def _left_child(i: int) -> int:
    return 2 * i + 1

def _right_child(i: int) -> int:
    return 2 * i + 2

def _parent(i: int) -> int:
    if i == 0:
        raise ValueError("root has no parent")
    return (i - 1) // 2

def _sibling(i: int) -> int:
    if i == 0:
        raise ValueError("root has no siblings")
    return i + 1 if i % 2 == 1 else i - 1

def make_merkle_tree(leaves: list[bytes]) -> list[bytes]:
    if not leaves:
        raise ValueError("expected non-zero number of leaves")
    for leaf in leaves:
        if len(leaf) != 32:
            raise ValueError(f"leaf hashes must be 32 bytes, got {len(leaf)}")

    tree = [b""] * (2 * len(leaves) - 1)
    for i, leaf in enumerate(leaves):
        tree[len(tree) - 1 - i] = leaf
    for i in range(len(tree) - 1 - len(leaves), -1, -1):
        tree[i] = hash_pair(tree[_left_child(i)], tree[_right_child(i)])
    return tree

def tree_proof(tree: list[bytes], index: int) -> list[bytes]:
    proof = []
    while index > 0:
        proof.append(tree[_sibling(index)])
        index = _parent(index)
    return proof


@dataclass
class LeafValue:
    value: bytes
    tree_index: int


class StandardMerkleTree:
    """A Merkle tree over packed byte strings, proofs verifiable by MerkleProof.sol."""

    def __init__(self, tree: list[bytes], values: list[LeafValue]) -> None:
        self.tree = tree
        self.values = values

    @classmethod
    def of(cls, values: list[bytes]) -> "StandardMerkleTree":
        """Build the tree; leaves are ordered by hash, `values` keep their input order."""
        hashed = sorted(
            ((leaf_hash(v), i) for i, v in enumerate(values)),
            key=lambda item: item[0],
        )
        tree = make_merkle_tree([h for h, _ in hashed])

        indexed = [LeafValue(v, 0) for v in values]
        for leaf_index, (_, value_index) in enumerate(hashed):
            indexed[value_index].tree_index = len(tree) - 1 - leaf_index
        return cls(tree, indexed)

    @classmethod
    def load(cls, data: dict) -> "StandardMerkleTree":
        if data.get("format") != DUMP_FORMAT:
            raise ValueError(f"unknown merkle tree dump format: {data.get('format')!r}")
        if data.get("leafEncoding") != LEAF_ENCODING:
            raise ValueError(f"unsupported leaf encoding: {data.get('leafEncoding')!r}")
        tree = [from_hex(h) for h in data["tree"]]
        values = []
        for entry in data["values"]:
            value = entry["value"]
            # Dumps store each leaf as a one-element tuple.
            if isinstance(value, list):
                value = value[0]
            values.append(LeafValue(from_hex(value), int(entry["treeIndex"])))
        return cls(tree, values)

    @property
    def root(self) -> bytes:
        return self.tree[0]

    def __len__(self) -> int:
        return len(self.values)

    def entries(self):
        for i, v in enumerate(self.values):
            yield i, v.value

    def leaf_hash(self, value: bytes) -> bytes:
        return leaf_hash(value)

    def leaf_lookup(self, value: bytes) -> int:
        for i, v in enumerate(self.values):
            if v.value == value:
                return i
        raise ValueError("leaf is not in tree")

    def get_proof(self, index: int) -> list[bytes]:
        if index < 0 or index >= len(self.values):
            raise IndexError("leaf index out of range")
        tree_index = self.values[index].tree_index
        proof = tree_proof(self.tree, tree_index)
        # Self-check: a wrong proof here means the tree is corrupt.
        if not verify(self.root, self.tree[tree_index], proof):
            raise ValueError("unable to prove value")
        return proof

    def verify(self, index: int, proof: list[bytes]) -> bool:
        if index < 0 or index >= len(self.values):
            raise IndexError("leaf index out of range")
        return verify(self.root, leaf_hash(self.values[index].value), proof)

    def validate(self) -> None:
        """Recompute every internal node and leaf hash; raise ValueError on mismatch."""
        n = len(self.tree)
        if n == 0 or n != 2 * len(self.values) - 1:
            raise ValueError("tree size does not match number of values")
        for i, node in enumerate(self.tree):
            if len(node) != 32:
                raise ValueError(f"node {i} is not 32 bytes")
            if _right_child(i) < n and node != hash_pair(self.tree[_left_child(i)], self.tree[_right_child(i)]):
                raise ValueError(f"merkle tree is invalid at node {i}")
        for i, v in enumerate(self.values):
            if not (n // 2 <= v.tree_index < n):
                raise ValueError(f"value {i} does not point to a leaf")
            if self.tree[v.tree_index] != leaf_hash(v.value):
                raise ValueError(f"merkle tree does not contain the expected value {i}")

    def dump(self) -> dict:
        return {
            "format": DUMP_FORMAT,
            "tree": [to_hex(h) for h in self.tree],
            "values": [{"value": [to_hex(v.value)], "treeIndex": v.tree_index} for v in self.values],
            "leafEncoding": list(LEAF_ENCODING),
        }
