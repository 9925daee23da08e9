from typing import List, Optional

import networkx as nx

from symbuild.spec import BuildIndexProtocol, Resolution


class GraphBuilder:
    def build_link_graph(
        self, index: BuildIndexProtocol, resolution: Optional[Resolution] = None
    ) -> nx.DiGraph:
        """
        Builds a file-level link graph from the build index.

        Nodes: Object file paths (str)
        Edges: An undefined symbol in the source file that the target file
               defines. Each edge carries the symbols that justify it.

        With a resolution, the graph is limited to that entry point's closure.
        """
        graph = nx.DiGraph()

        if resolution is not None:
            files = [resolution.entry_point, *resolution.dependencies]
        else:
            files = [f for package in index.packages() for f in index.files_of(package)]

        # 1. Add all object files as nodes
        for object_path in files:
            graph.add_node(object_path)

        # 2. Add edges based on undefined -> definer lookups
        for source_path in files:
            for symbol in index.undefined_of(source_path):
                target_path = index.definer_of(symbol)

                # Symbols without a definer are satisfied by the external linker.
                if target_path is None or target_path == source_path:
                    continue
                if target_path not in graph:
                    continue

                if graph.has_edge(source_path, target_path):
                    graph.edges[source_path, target_path]["symbols"].append(symbol)
                else:
                    graph.add_edge(source_path, target_path, symbols=[symbol])

        return graph

    def find_cycles(self, graph: nx.DiGraph) -> List[List[str]]:
        """
        Returns groups of object files that reference each other cyclically.
        """
        return [
            sorted(component)
            for component in nx.strongly_connected_components(graph)
            if len(component) > 1
        ]
