"""Force-directed layout.

A small spring-electrical simulation:

* every pair of nodes repels with ``repulsion / distance**2``;
* every edge acts as a spring pulling its endpoints toward
  ``ideal_distance`` with stiffness ``attraction``;
* velocities accumulate forces, move the node, then decay by
  ``damping``.

Positions and velocities live in a per-call arena keyed by node id.
Nothing survives between calls.
"""

import math
from dataclasses import dataclass

from topomap.layout.base import MARGIN, known_edges
from topomap.model.topology import Edge, Node


@dataclass
class ForceConfig:
    """Simulation constants."""

    iterations: int = 100
    repulsion: float = 5000.0
    attraction: float = 0.05
    damping: float = 0.85
    ideal_distance: float = 200.0
    seed_radius: float = 300.0  # circle for nodes without a position
    min_distance: float = 1.0


@dataclass
class _Body:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


def _seed_bodies(nodes: list[Node], radius: float) -> dict[str, _Body]:
    """Initial positions; zero coordinates count as unset."""
    bodies: dict[str, _Body] = {}
    count = len(nodes)
    for index, node in enumerate(nodes):
        angle = 2 * math.pi * index / count
        x = node.position.x or math.cos(angle) * radius
        y = node.position.y or math.sin(angle) * radius
        bodies[node.id] = _Body(x=x, y=y)
    return bodies


def force_directed_layout(
    nodes: list[Node],
    edges: list[Edge],
    iterations: int | None = None,
    config: ForceConfig | None = None,
) -> list[Node]:
    """Run the simulation and return positioned copies of ``nodes``.

    Args:
        nodes: Nodes to place
        edges: Springs between nodes (dangling edges are ignored)
        iterations: Overrides ``config.iterations`` when given
        config: Simulation constants

    Returns:
        Positioned copies of ``nodes`` in input order, translated so the
        smallest x and y sit at the layout margin
    """
    if not nodes:
        return []

    config = config or ForceConfig()
    steps = config.iterations if iterations is None else iterations

    bodies = _seed_bodies(nodes, config.seed_radius)
    order = [bodies[node.id] for node in nodes]
    springs = [(bodies[e.source], bodies[e.target]) for e in known_edges(nodes, edges)]

    for _ in range(steps):
        for i, first in enumerate(order):
            for second in order[i + 1:]:
                dx = second.x - first.x
                dy = second.y - first.y
                dist = max(math.hypot(dx, dy), config.min_distance)
                force = config.repulsion / (dist * dist)
                fx = dx / dist * force
                fy = dy / dist * force
                first.vx -= fx
                first.vy -= fy
                second.vx += fx
                second.vy += fy

        for source, target in springs:
            dx = target.x - source.x
            dy = target.y - source.y
            dist = max(math.hypot(dx, dy), config.min_distance)
            force = (dist - config.ideal_distance) * config.attraction
            fx = dx / dist * force
            fy = dy / dist * force
            source.vx += fx
            source.vy += fy
            target.vx -= fx
            target.vy -= fy

        for body in order:
            body.x += body.vx
            body.y += body.vy
            body.vx *= config.damping
            body.vy *= config.damping

    offset_x = MARGIN - min(body.x for body in order)
    offset_y = MARGIN - min(body.y for body in order)

    return [
        node.moved_to(bodies[node.id].x + offset_x, bodies[node.id].y + offset_y)
        for node in nodes
    ]
