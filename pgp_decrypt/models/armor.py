"""
ASCII-armor domain models.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class ArmorBlock:
    """
    A decoded ASCII-armor block.

    Attributes:
        block_type: Label between ``BEGIN `` and the trailing dashes,
            e.g. ``PGP PRIVATE KEY BLOCK`` or ``Message``.
        headers: Armor headers in the order they appeared.
        body: Base64-decoded payload (an OpenPGP packet stream).
        checksum: CRC-24 from the armor tail, if one was present.
    """

    block_type: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = field(repr=False)
    checksum: int | None = None

    def __len__(self) -> int:
        return len(self.body)
