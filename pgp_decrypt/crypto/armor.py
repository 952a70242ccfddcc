"""
ASCII-armor codec (RFC 4880, section 6).

Decodes any armor label, not only the ``PGP <TYPE>`` family: blocks produced by
the companion encryptor are labelled ``Message``.
"""

import base64
import binascii
from collections.abc import Mapping

from pgpy.types import Armorable

from pgp_decrypt.exceptions import ArmorDecodeError
from pgp_decrypt.models.armor import ArmorBlock

_BEGIN_PREFIX = "-----BEGIN "
_END_PREFIX = "-----END "
_DASHES = "-----"
_LINE_LENGTH = 64


def byte_length(data: bytes | str) -> int:
    """Size of ``data`` in bytes; text is measured UTF-8 encoded."""
    if isinstance(data, str):
        return len(data.encode("utf-8", errors="surrogatepass"))
    return len(data)


def decode_armor(data: bytes | str, *, require_checksum: bool = False) -> ArmorBlock:
    """
    Decode an ASCII-armored block.

    Text before the BEGIN line and after the END line is ignored.

    Args:
        data: Armored text.
        require_checksum: Reject blocks without a ``=XXXX`` CRC-24 line.

    Returns:
        The decoded ArmorBlock.

    Raises:
        ArmorDecodeError: If markers are missing or mismatched, the body is not
            valid base64, or the checksum is missing (when required) or wrong.
    """
    lines = _to_text(data).splitlines()
    begin_index, block_type = _find_begin_line(lines)
    headers, body_index = _parse_headers(lines, begin_index + 1)
    body_lines, checksum_line = _collect_body(lines, body_index, block_type)

    body = _decode_body(body_lines)
    checksum = _decode_checksum(checksum_line) if checksum_line is not None else None

    if checksum is None and require_checksum:
        raise ArmorDecodeError("Armor checksum missing")
    if checksum is not None and checksum != Armorable.crc24(body):
        raise ArmorDecodeError("Armor checksum mismatch")

    return ArmorBlock(block_type=block_type, headers=headers, body=body, checksum=checksum)


def encode_armor(
    block_type: str,
    body: bytes,
    headers: Mapping[str, str] | None = None,
) -> str:
    """
    Encode ``body`` as an ASCII-armored block with a CRC-24 checksum.

    Args:
        block_type: Armor label, e.g. ``Message`` or ``PGP MESSAGE``.
        body: Binary payload.
        headers: Optional armor headers.

    Returns:
        Armored text ending with a newline.
    """
    encoded = base64.b64encode(body).decode("ascii")
    lines = [f"{_BEGIN_PREFIX}{block_type}{_DASHES}"]
    lines.extend(f"{key}: {value}" for key, value in (headers or {}).items())
    lines.append("")
    lines.extend(encoded[i : i + _LINE_LENGTH] for i in range(0, len(encoded), _LINE_LENGTH))
    checksum = Armorable.crc24(body).to_bytes(3, "big")
    lines.append("=" + base64.b64encode(checksum).decode("ascii"))
    lines.append(f"{_END_PREFIX}{block_type}{_DASHES}")
    return "\n".join(lines) + "\n"


def _to_text(data: bytes | str) -> str:
    try:
        if isinstance(data, str):
            data.encode("ascii")
            return data
        return bytes(data).decode("ascii")
    except UnicodeError as e:
        msg = "Armored data is not ASCII text"
        raise ArmorDecodeError(msg) from e


def _find_begin_line(lines: list[str]) -> tuple[int, str]:
    for index, line in enumerate(lines):
        line = line.strip()
        if line.startswith(_BEGIN_PREFIX) and line.endswith(_DASHES):
            block_type = line[len(_BEGIN_PREFIX) : -len(_DASHES)]
            if block_type:
                return index, block_type
    raise ArmorDecodeError("Armor BEGIN marker not found")


def _parse_headers(lines: list[str], start: int) -> tuple[dict[str, str], int]:
    headers: dict[str, str] = {}
    for index in range(start, len(lines)):
        line = lines[index].strip()
        if not line:
            return headers, index + 1
        key, sep, value = line.partition(": ")
        if sep and key and " " not in key:
            headers[key] = value
            continue
        if headers:
            msg = f"Malformed armor header line: {line!r}"
            raise ArmorDecodeError(msg)
        # No header section, body starts right after BEGIN
        return headers, index
    raise ArmorDecodeError("Armor END marker not found")


def _collect_body(
    lines: list[str], start: int, block_type: str
) -> tuple[list[str], str | None]:
    body_lines: list[str] = []
    checksum_line: str | None = None
    for index in range(start, len(lines)):
        line = lines[index].strip()
        if line.startswith(_END_PREFIX):
            _check_end_line(line, block_type)
            return body_lines, checksum_line
        if checksum_line is not None:
            if line:
                msg = "Unexpected data after armor checksum"
                raise ArmorDecodeError(msg)
            continue
        if line.startswith("=") and not line.startswith(_DASHES):
            checksum_line = line[1:]
        elif line:
            body_lines.append(line)
    raise ArmorDecodeError("Armor END marker not found")


def _check_end_line(line: str, block_type: str) -> None:
    expected = f"{_END_PREFIX}{block_type}{_DASHES}"
    if line == expected:
        return
    msg = f"Armor END marker does not match BEGIN: expected {expected!r}"
    raise ArmorDecodeError(msg)


def _decode_body(body_lines: list[str]) -> bytes:
    if not body_lines:
        raise ArmorDecodeError("Armor body is empty")
    try:
        return base64.b64decode("".join(body_lines), validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Armor body is not valid base64: {e}"
        raise ArmorDecodeError(msg) from e


def _decode_checksum(encoded: str) -> int:
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Armor checksum is not valid base64: {e}"
        raise ArmorDecodeError(msg) from e
    if len(raw) != 3:
        msg = f"Armor checksum must be 3 bytes, got {len(raw)}"
        raise ArmorDecodeError(msg)
    return int.from_bytes(raw, "big")
