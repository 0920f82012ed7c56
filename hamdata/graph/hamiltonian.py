"""Exact Hamiltonicity oracle by exhaustive backtracking.

Both searches fix node 0 as the start of the cycle and try neighbors in
increasing node index order, so get_cycle() returns the lexicographically
smallest Hamiltonian cycle that starts at node 0. Worst case explores
(node_count - 1)! orderings; branches without an edge are pruned immediately.
Recursion depth is bounded by node_count.
"""

from hamdata.graph.types import Graph

START_NODE = 0


def _neighbor_lists(graph: Graph) -> list[list[int]]:
    return [graph.neighbors(i) for i in range(graph.node_count)]


def is_hamiltonian(graph: Graph) -> bool:
    """Decide whether the graph contains a Hamiltonian cycle.

    Searches over (remaining unvisited nodes, current node) states. When
    nothing remains, the cycle closes iff current is adjacent to the start.
    """
    adj = graph.adjacency
    neighbors = _neighbor_lists(graph)

    def search(remaining: frozenset[int], current: int) -> bool:
        if not remaining:
            return bool(adj[current, START_NODE])
        for nxt in neighbors[current]:
            if nxt in remaining and search(remaining - {nxt}, nxt):
                return True
        return False

    return search(frozenset(range(1, graph.node_count)), START_NODE)


def get_cycle(graph: Graph) -> list[int]:
    """Find a witness Hamiltonian cycle.

    Returns:
        Node sequence of length node_count + 1 starting and ending at node 0,
        or an empty list if the graph is not Hamiltonian.
    """
    n = graph.node_count
    adj = graph.adjacency
    neighbors = _neighbor_lists(graph)

    visited = [False] * n
    visited[START_NODE] = True
    path = [START_NODE]

    def extend(current: int) -> bool:
        if len(path) == n:
            return bool(adj[current, START_NODE])
        for nxt in neighbors[current]:
            if visited[nxt]:
                continue
            visited[nxt] = True
            path.append(nxt)
            if extend(nxt):
                return True
            path.pop()
            visited[nxt] = False
        return False

    if extend(START_NODE):
        return path + [START_NODE]
    return []


def verify_cycle(graph: Graph, cycle: list[int]) -> bool:
    """Check that cycle is a Hamiltonian cycle of graph.

    The sequence must have node_count + 1 entries, close on its first node,
    visit every node exactly once before closing, and use only present edges.
    """
    n = graph.node_count
    if len(cycle) != n + 1 or cycle[0] != cycle[-1]:
        return False
    if sorted(cycle[:-1]) != list(range(n)):
        return False
    return all(graph.has_edge(u, v) for u, v in zip(cycle, cycle[1:]))
