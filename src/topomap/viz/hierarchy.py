"""Console views of the inferred CIDR hierarchy.

Renders the containment forest as a Rich tree, with the nodes that
have no place in it listed underneath.
"""

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from topomap.hierarchy.builder import Hierarchy
from topomap.model.inventory import NetworkStats
from topomap.model.topology import Node, NodeType

TYPE_STYLES = {
    NodeType.CIDR: "bold cyan",
    NodeType.SERVER: "green",
    NodeType.PERSONAL_COMPUTER: "yellow",
    NodeType.NETWORK_DEVICE: "magenta",
}


class HierarchyView:
    """Renders a hierarchy for the terminal.

    Example:
        view = HierarchyView(nodes, build_hierarchy(nodes))
        view.show()
    """

    def __init__(self, nodes: list[Node], hierarchy: Hierarchy, console: Console | None = None):
        self.nodes = nodes
        self.hierarchy = hierarchy
        self.console = console or Console()

    def _node_text(self, node: Node) -> str:
        style = TYPE_STYLES.get(node.type, "white")
        address = node.data.ip_or_cidr or "-"
        return f"[{style}]{node.label}[/{style}] [dim]{node.type.value} {address}[/dim]"

    def build_tree(self) -> Tree:
        """Build a Rich tree of the containment forest."""
        by_id = {node.id: node for node in self.nodes}
        children = self.hierarchy.children_of()
        parent_of = self.hierarchy.parent_of

        root = Tree("[bold]Address hierarchy[/bold]")
        stack = [
            (root, node.id)
            for node in reversed(self.nodes)
            if node.id in children and node.id not in parent_of
        ]
        while stack:
            branch, node_id = stack.pop()
            child_branch = branch.add(self._node_text(by_id[node_id]))
            for child_id in reversed(children.get(node_id, [])):
                stack.append((child_branch, child_id))

        orphans = [
            node for node in self.nodes
            if node.id not in parent_of and node.id not in children
        ]
        if orphans:
            unplaced = root.add("[dim]Unplaced[/dim]")
            for node in orphans:
                unplaced.add(self._node_text(node))

        return root

    def show(self) -> None:
        """Print the hierarchy tree."""
        self.console.print(self.build_tree())


def stats_table(stats: NetworkStats, total_edges: int) -> Table:
    """Summary table of asset counts."""
    table = Table(title="Topology Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Nodes", str(stats.total_nodes))
    table.add_row("Edges", str(total_edges))
    table.add_row("CIDR blocks", str(stats.cidr_count))
    table.add_row("Servers", str(stats.server_count))
    table.add_row("PCs", str(stats.pc_count))
    table.add_row("Network devices", str(stats.device_count))
    table.add_row("IP addresses", str(stats.total_ips))
    return table
