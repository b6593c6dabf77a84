"""
Minimal ABI codec for the swap contract.

Encodes calls with static ``address``/``uint256``/``bool`` arguments and a
dynamic ``bytes`` tail, and decodes event logs whose parameters are static.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from eth_utils import keccak, to_checksum_address

from .models import DecodedEvent


logger = logging.getLogger(__name__)


_SIGNATURE_RE = re.compile(r"^(?P<name>[A-Za-z_][A-Za-z0-9_]*)\((?P<types>[^()]*)\)$")
_STATIC_TYPES = {"address", "uint256", "bool", "bytes32"}
_WORD_HEX = 64


def _strip_0x(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def _encode_uint(value: int) -> str:
    if value < 0:
        raise ValueError("Value must be non-negative")
    if value >= 2**256:
        raise ValueError("Value does not fit in uint256")
    return hex(value)[2:].rjust(_WORD_HEX, "0")


def _encode_address(address: str) -> str:
    addr = _strip_0x(address).lower()
    if len(addr) != 40:
        raise ValueError(f"Invalid address length: {address}")
    if not re.fullmatch(r"[0-9a-f]{40}", addr):
        raise ValueError(f"Invalid address: {address}")
    return addr.rjust(_WORD_HEX, "0")


def _encode_bytes(data: str) -> str:
    hex_data = _strip_0x(data)
    if not re.fullmatch(r"[0-9a-fA-F]*", hex_data):
        raise ValueError(f"Invalid hex byte data: {data[:20]}")
    if len(hex_data) % 2 != 0:
        # left-pad odd nibble counts to a whole byte
        hex_data = "0" + hex_data
    data_len = len(hex_data) // 2
    padded_len = ((data_len + 31) // 32) * 32
    padding = "0" * ((padded_len - data_len) * 2)
    return _encode_uint(data_len) + hex_data.lower() + padding


def parse_signature(signature: str) -> Tuple[str, List[str]]:
    """Split ``name(type1,type2)`` into its name and argument types."""
    match = _SIGNATURE_RE.match(signature.replace(" ", ""))
    if not match:
        raise ValueError(f"Invalid function signature: {signature}")
    types = match.group("types")
    return match.group("name"), [t for t in types.split(",") if t] if types else []


def selector(signature: str) -> str:
    return "0x" + keccak(text=signature)[:4].hex()


def event_topic(signature: str) -> str:
    return "0x" + keccak(text=signature).hex()


def encode_call(signature: str, args: Sequence[Any] = ()) -> str:
    """Build calldata for ``signature`` applied to ``args``."""
    _, types = parse_signature(signature)
    if len(types) != len(args):
        raise ValueError(f"{signature} takes {len(types)} arguments, got {len(args)}")

    head: List[str] = []
    tail: List[str] = []
    head_size = 32 * len(types)
    for abi_type, value in zip(types, args):
        if abi_type == "address":
            head.append(_encode_address(value))
        elif abi_type in ("uint256", "uint"):
            head.append(_encode_uint(int(value)))
        elif abi_type == "bool":
            head.append(_encode_uint(1 if value else 0))
        elif abi_type == "bytes":
            offset = head_size + sum(len(part) // 2 for part in tail)
            head.append(_encode_uint(offset))
            tail.append(_encode_bytes(value))
        else:
            raise ValueError(f"Unsupported ABI type: {abi_type}")
    return selector(signature) + "".join(head) + "".join(tail)


def _decode_word(abi_type: str, word: str) -> Any:
    if abi_type == "address":
        return to_checksum_address("0x" + word[-40:])
    if abi_type in ("uint256", "uint"):
        return int(word, 16)
    if abi_type == "bool":
        return int(word, 16) != 0
    if abi_type == "bytes32":
        return "0x" + word
    raise ValueError(f"Unsupported ABI type: {abi_type}")


@dataclass(frozen=True)
class EventParam:
    name: str
    type: str
    indexed: bool = False


@dataclass(frozen=True)
class EventSchema:
    """Schema of one contract event."""
    name: str
    params: Tuple[EventParam, ...]

    def __post_init__(self):
        for param in self.params:
            if param.type not in _STATIC_TYPES:
                raise ValueError(f"Unsupported event parameter type: {param.type}")

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(p.type for p in self.params)})"

    @property
    def topic(self) -> str:
        return event_topic(self.signature)

    def decode(self, log: Dict[str, Any]) -> DecodedEvent:
        """Decode a raw receipt log emitted for this event."""
        topics = list(log.get("topics") or [])[1:]
        data = _strip_0x(log.get("data") or "")
        args: Dict[str, Any] = {}
        position = 0
        for param in self.params:
            if param.indexed:
                if not topics:
                    raise ValueError(f"Missing topic for indexed parameter {param.name}")
                args[param.name] = _decode_word(param.type, _strip_0x(topics.pop(0)))
                continue
            word = data[position:position + _WORD_HEX]
            if len(word) != _WORD_HEX:
                raise ValueError(f"Log data too short for {self.name}.{param.name}")
            args[param.name] = _decode_word(param.type, word)
            position += _WORD_HEX

        return DecodedEvent(
            name=self.name,
            args=args,
            address=log.get("address"),
            log_index=parse_quantity(log.get("logIndex")),
        )


def parse_quantity(value: Any) -> Optional[int]:
    """Parse a JSON-RPC quantity (hex string, decimal string, or int)."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(value, 16) if str(value).startswith("0x") else int(value)


def decode_logs(
    logs: Sequence[Dict[str, Any]],
    events: Sequence[EventSchema],
    address: Optional[str] = None,
) -> Tuple[DecodedEvent, ...]:
    """Decode the logs matching a known event, preserving receipt order.

    When ``address`` is given only logs emitted by that contract are considered.
    """
    by_topic = {schema.topic: schema for schema in events}
    decoded: List[DecodedEvent] = []
    for log in logs:
        if address and (log.get("address") or "").lower() != address.lower():
            continue
        topics = log.get("topics") or []
        if not topics:
            continue
        schema = by_topic.get(topics[0].lower())
        if schema is None:
            continue
        try:
            decoded.append(schema.decode(log))
        except ValueError as e:
            logger.warning(f"Skipping undecodable {schema.name} log: {e}")
    return tuple(decoded)
