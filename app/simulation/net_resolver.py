"""
simulation/net_resolver.py

Groups wires into electrical nets: two pins share a net iff a chain of
wires joins them. Nets are rebuilt from scratch on every call.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional

from models.component import ComponentData
from models.wire import WireData

logger = logging.getLogger(__name__)

PinKey = tuple[str, str]  # (component_id, pin_id)


@dataclass
class NetMap:
    """
    Result of net resolution.

    Net ids are consecutive integers starting at 0. A pin that no wire
    touches has no entry in pin_to_net: callers must treat a missing key as
    "unconnected", never as net 0.
    """

    wire_to_net: dict[str, int] = field(default_factory=dict)
    pin_to_net: dict[PinKey, int] = field(default_factory=dict)
    net_count: int = 0

    def net_of(self, component_id: str, pin_id: str) -> Optional[int]:
        return self.pin_to_net.get((component_id, pin_id))

    def pins_on_net(self, net_id: int) -> list[PinKey]:
        return [key for key, net in self.pin_to_net.items() if net == net_id]


def _has_valid_endpoints(wire: WireData, components: dict[str, ComponentData]) -> bool:
    for comp_id, pin_id in wire.get_terminals():
        comp = components.get(comp_id)
        if comp is None or not comp.has_pin(pin_id):
            return False
    return True


def resolve_nets(wires: list[WireData], components: Optional[Iterable[ComponentData]] = None) -> NetMap:
    """
    Partition wires and the pins they touch into nets.

    Args:
        wires: The circuit's wires, in order. Net ids follow this order.
        components: Optional component list used to validate endpoints. A wire
            whose endpoint names an unknown component or a pin missing from
            that component's pin table is treated as unconnected and skipped.

    Returns:
        NetMap with wire -> net, pin -> net and the net count.
    """
    if components is not None:
        by_id = {c.component_id: c for c in components}
        valid = []
        for wire in wires:
            if _has_valid_endpoints(wire, by_id):
                valid.append(wire)
            else:
                logger.warning("Ignoring %r: endpoint pin does not exist", wire)
        wires = valid

    # pin key -> list positions of the wires touching it
    pins_to_wires: dict[PinKey, list[int]] = {}
    for index, wire in enumerate(wires):
        for key in wire.get_terminals():
            pins_to_wires.setdefault(key, []).append(index)

    # Traversal runs over list positions so wires sharing an id still join nets
    net_map = NetMap()
    visited: set[int] = set()
    for start in range(len(wires)):
        if start in visited:
            continue

        net_id = net_map.net_count
        net_map.net_count += 1
        visited.add(start)
        queue = deque([start])

        while queue:
            current = wires[queue.popleft()]
            net_map.wire_to_net[current.wire_id] = net_id
            for key in current.get_terminals():
                net_map.pin_to_net[key] = net_id
                for neighbour in pins_to_wires.get(key, []):
                    if neighbour not in visited:
                        visited.add(neighbour)
                        queue.append(neighbour)

    return net_map
