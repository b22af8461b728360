"""USB setup packets and a registry of pluggable USB function modules."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

__all__ = [
    "USBError",
    "USBSetup",
    "PluggableUSBModule",
    "PluggableUSB",
]

_SETUP_FORMAT = struct.Struct("<BBBBHH")


class USBError(Exception):
    """A plugged module failed to answer a request."""


@dataclass
class USBSetup:
    """The eight-byte setup packet of a USB control transfer."""

    bm_request_type: int = 0
    b_request: int = 0
    w_value_l: int = 0
    w_value_h: int = 0
    w_index: int = 0
    w_length: int = 0

    def __post_init__(self) -> None:
        for name in ("bm_request_type", "b_request", "w_value_l", "w_value_h"):
            if not 0 <= getattr(self, name) <= 0xFF:
                raise ValueError(f"{name} must fit in one byte")
        for name in ("w_index", "w_length"):
            if not 0 <= getattr(self, name) <= 0xFFFF:
                raise ValueError(f"{name} must fit in two bytes")

    @property
    def direction(self) -> int:
        """Low five bits of the request type: the recipient."""
        return self.bm_request_type & 0x1F

    @property
    def type(self) -> int:
        """Bits five and six of the request type."""
        return (self.bm_request_type >> 5) & 0x03

    @property
    def transfer_direction(self) -> int:
        """Top bit of the request type: 1 for device to host."""
        return (self.bm_request_type >> 7) & 0x01

    @property
    def w_value(self) -> int:
        """The two value bytes as one little-endian word."""
        return self.w_value_l | (self.w_value_h << 8)

    @classmethod
    def from_bytes(cls, data: bytes) -> "USBSetup":
        """Decode a packet; raise ValueError unless it is eight bytes."""
        if len(data) != _SETUP_FORMAT.size:
            raise ValueError(
                f"setup packet must be {_SETUP_FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*_SETUP_FORMAT.unpack(bytes(data)))

    def to_bytes(self) -> bytes:
        """Encode the packet as it travels on the bus."""
        return _SETUP_FORMAT.pack(
            self.bm_request_type,
            self.b_request,
            self.w_value_l,
            self.w_value_h,
            self.w_index,
            self.w_length,
        )


class PluggableUSBModule(ABC):
    """A USB function that claims interfaces and endpoints when plugged."""

    def __init__(
        self,
        num_endpoints: int,
        num_interfaces: int,
        endpoint_types: Sequence[int],
    ) -> None:
        types = tuple(endpoint_types)
        if len(types) < num_endpoints:
            raise ValueError(
                f"{num_endpoints} endpoints need as many types, got {len(types)}"
            )
        self.num_endpoints = num_endpoints
        self.num_interfaces = num_interfaces
        self.endpoint_types = types[:num_endpoints]
        self.plugged_interface: int | None = None
        self.plugged_endpoint: int | None = None

    @abstractmethod
    def setup(self, setup: USBSetup) -> bool:
        """Handle a control request; return True if it was handled."""

    @abstractmethod
    def get_interface(self, interface_count: int) -> tuple[int, int]:
        """Send interface descriptors.

        Returns the bytes sent (negative on failure) and the interface count
        raised by the interfaces described.
        """

    @abstractmethod
    def get_descriptor(self, setup: USBSetup) -> int:
        """Answer a descriptor request; return nonzero if it was handled."""

    def get_short_name(self) -> str:
        """A one-letter name derived from the first interface number."""
        if self.plugged_interface is None:
            raise RuntimeError("module is not plugged")
        return chr(ord("A") + self.plugged_interface)


class PluggableUSB:
    """Hands out interface and endpoint numbers to modules and routes requests."""

    def __init__(
        self,
        total_endpoints: int,
        first_interface: int = 0,
        first_endpoint: int = 0,
    ) -> None:
        self.total_endpoints = total_endpoints
        self.last_interface = first_interface
        self.last_endpoint = first_endpoint
        self.endpoint_types: dict[int, int] = {}
        self._modules: list[PluggableUSBModule] = []

    @property
    def modules(self) -> tuple[PluggableUSBModule, ...]:
        """Plugged modules in the order they were plugged."""
        return tuple(self._modules)

    def plug(self, node: PluggableUSBModule) -> bool:
        """Plug a module; return False if too few endpoints are left."""
        if any(m is node for m in self._modules):
            raise ValueError("module is already plugged")
        if self.last_endpoint + node.num_endpoints > self.total_endpoints:
            return False
        self._modules.append(node)
        node.plugged_interface = self.last_interface
        node.plugged_endpoint = self.last_endpoint
        self.last_interface += node.num_interfaces
        for ep_type in node.endpoint_types:
            self.endpoint_types[self.last_endpoint] = ep_type
            self.last_endpoint += 1
        return True

    def get_interface(self, interface_count: int = 0) -> tuple[int, int]:
        """Collect interface descriptors from every module.

        Returns the total bytes sent and the final interface count; raises
        USBError if a module fails.
        """
        sent = 0
        for node in self._modules:
            res, interface_count = node.get_interface(interface_count)
            if res < 0:
                raise USBError(f"module {node!r} failed to send its interfaces")
            sent += res
        return sent, interface_count

    def get_descriptor(self, setup: USBSetup) -> int:
        """Return the answer of the first module that handles the request, else 0."""
        for node in self._modules:
            ret = node.get_descriptor(setup)
            if ret:
                return ret
        return 0

    def setup(self, setup: USBSetup) -> bool:
        """Offer a control request to each module until one handles it."""
        return any(node.setup(setup) for node in self._modules)

    def get_short_name(self) -> str:
        """The short names of all modules joined together."""
        return "".join(node.get_short_name() for node in self._modules)