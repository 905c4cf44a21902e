from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
from .types import LatticeNode
from .dict.connection import ConnectionCostMatrix
from .errors import AnalysisFailure
from .lattice import Lattice

INF = 10**18


@dataclass
class ViterbiResult:
    nodes: List[LatticeNode]
    total_cost: int


def viterbi_decode(
    lattice: Lattice,
    conn: ConnectionCostMatrix,
) -> ViterbiResult:
    text = lattice.text
    n = len(text)
    # build node idx for per-node dp (bigram trans cost)
    nodes: List[LatticeNode] = []
    nodes_by_start: List[List[int]] = [[] for _ in range(n + 1)]
    nodes_by_end: List[List[int]] = [[] for _ in range(n + 1)]
    for i in range(n):
        for node in lattice.candidates_from(i):
            idx = len(nodes)
            nodes.append(node)
            nodes_by_start[i].append(idx)
            nodes_by_end[node.end].append(idx)

    if not nodes:
        if n:
            raise AnalysisFailure(f"empty lattice for {n} chars")
        return ViterbiResult([], 0)

    best_cost: List[int] = [INF] * len(nodes)
    best_prev: List[Optional[int]] = [None] * len(nodes)

    bos_right_id = conn.bos_right_id()
    # init nodes starting at 0 from BOS
    for idx in nodes_by_start[0]:
        node = nodes[idx]
        best_cost[idx] = conn.cost(bos_right_id, node.entry.left_id) + node.entry.word_cost + node.penalty

    # dp fwd by start pos; ties keep the earlier candidate
    for i in range(1, n):
        if not nodes_by_start[i]:
            continue
        prev_nodes = nodes_by_end[i]
        if not prev_nodes:
            continue
        for idx in nodes_by_start[i]:
            node = nodes[idx]
            own = node.entry.word_cost + node.penalty
            best = INF
            best_prev_idx: Optional[int] = None
            for pidx in prev_nodes:
                prev_cost = best_cost[pidx]
                if prev_cost >= INF:
                    continue
                cand = prev_cost + conn.cost(nodes[pidx].entry.right_id, node.entry.left_id) + own
                if cand < best:
                    best = cand
                    best_prev_idx = pidx
            best_cost[idx] = best
            best_prev[idx] = best_prev_idx

    # EOS transition from n
    eos_left_id = conn.eos_left_id()
    total = INF
    last_idx: Optional[int] = None
    for idx in nodes_by_end[n]:
        cost = best_cost[idx]
        if cost >= INF:
            continue
        total_cost = cost + conn.cost(nodes[idx].entry.right_id, eos_left_id)
        if total_cost < total:
            total = total_cost
            last_idx = idx

    if last_idx is None:
        raise AnalysisFailure(f"no path through lattice for {text[:32]!r}")

    # reconstruct best path
    path: List[LatticeNode] = []
    cur: Optional[int] = last_idx
    while cur is not None:
        path.append(nodes[cur])
        cur = best_prev[cur]
    path.reverse()
    return ViterbiResult(path, int(total))
