from itertools import combinations
from typing import Sequence

import networkx as nx

from .models import Activity


def build_resource_conflict_graph(activities: Sequence[Activity]) -> nx.Graph:
    """Activities as nodes, an edge wherever two of them share an instructor or a room."""
    G = nx.Graph()
    for act in activities:
        G.add_node(act.id, instructor=act.instructor_id, room=act.room_id)
    for a, b in combinations(activities, 2):
        shared = set()
        if a.instructor_id == b.instructor_id:
            shared.add("instructor")
        if a.room_id == b.room_id:
            shared.add("room")
        if shared:
            G.add_edge(a.id, b.id, shared=shared)
    return G
