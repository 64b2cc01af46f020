"""
Common test fixtures shared by all modules.

Provides leaf-set factories for allowtree tests:
- Single-character text leaves ("a", "b", ...)
- The recorded 10-address allow list with its golden root
- Large generated leaf sets for batch proof tests
"""

from typing import Sequence


# Root of [b"a", b"b", b"c", b"d", b"e", b"f"]
ABCDEF_ROOT_HEX = "9012f1e18a87790d2e01faace75aaaca38e53df437cdce2c0552464dda4af49c"

# Recorded allow list; order is significant
GOLDEN_ADDRESSES: tuple[str, ...] = (
    "0xE124F06277b5AC791bA45B92853BA9A0ea93327D",
    "0x07d048f78B7C093B3Ef27D478B78026a70D9734e",
    "0x38976611f5f7bEAd7e79E752f5B80AE72dD3eFa7",
    "0x1Ab00ffedD724B930080aD30269083F1453cF34E",
    "0x860a6bC426C3bb1186b2E11Ac486ABa000C209B4",
    "0x0B3eC21fc53AD8b17AF4A80723c1496541fCb35f",
    "0x2D13F6CEe6dA8b30a84ee7954594925bd5E47Ab7",
    "0x3C64Cd43331beb5B6fAb76dbAb85226955c5CC3A",
    "0x238dA873f984188b4F4c7efF03B5580C65a49dcB",
    "0xbAfC038aDfd8BcF6E632C797175A057714416d04",
)

# Root of GOLDEN_ADDRESSES decoded to 20-byte leaves
GOLDEN_ADDRESSES_ROOT_HEX = "ed40d49077a2cd13601cf79a512e6b92c7fd0f952e7dc9f4758d7134f9712bc4"


def make_text_leaves(letters: str = "abcde") -> list[bytes]:
    """One UTF-8 leaf per character, in order."""
    return [c.encode("utf-8") for c in letters]


def make_address_leaves(addresses: Sequence[str] = GOLDEN_ADDRESSES) -> list[bytes]:
    """Decode 0x-prefixed addresses into raw 20-byte leaves."""
    return [bytes.fromhex(addr[2:]) for addr in addresses]


def make_numbered_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Distinct leaves b"leaf0", b"leaf1", ... for size-driven tests."""
    return [f"{prefix}{i}".encode("utf-8") for i in range(count)]
