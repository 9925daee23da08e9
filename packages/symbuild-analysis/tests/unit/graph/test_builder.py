from symbuild.analysis import DependencyResolver
from symbuild.analysis.graph import GraphBuilder
from symbuild.index import BuildIndex
from symbuild.spec import ClassifiedObject


def _build_index():
    index = BuildIndex()
    for path, package, exported, undefined in [
        ("/r/foo/main.o", "foo", ["main"], ["bar_init", "bar_run", "puts"]),
        ("/r/bar/bar.o", "bar", ["bar_init", "bar_run"], ["baz_init"]),
        ("/r/baz/baz.o", "baz", ["baz_init"], ["bar_run"]),
        ("/r/other/other.o", "other", ["other"], ["baz_init"]),
    ]:
        index.record(
            ClassifiedObject(
                path=path,
                package=package,
                exported=tuple(exported),
                undefined=tuple(undefined),
                is_entry_point="main" in exported,
            )
        )
    index.freeze()
    return index


def test_link_graph_edges_carry_symbols():
    graph = GraphBuilder().build_link_graph(_build_index())

    assert set(graph.nodes) == {
        "/r/foo/main.o",
        "/r/bar/bar.o",
        "/r/baz/baz.o",
        "/r/other/other.o",
    }
    assert graph.edges["/r/foo/main.o", "/r/bar/bar.o"]["symbols"] == [
        "bar_init",
        "bar_run",
    ]
    assert graph.has_edge("/r/other/other.o", "/r/baz/baz.o")
    # External symbols produce no edges
    assert graph.out_degree("/r/foo/main.o") == 1


def test_link_graph_limited_to_resolution():
    index = _build_index()
    resolution = DependencyResolver(index).resolve("/r/foo/main.o")

    graph = GraphBuilder().build_link_graph(index, resolution)

    assert "/r/other/other.o" not in graph
    assert set(graph.nodes) == {"/r/foo/main.o", "/r/bar/bar.o", "/r/baz/baz.o"}


def test_find_cycles_reports_mutual_references():
    builder = GraphBuilder()
    graph = builder.build_link_graph(_build_index())

    assert builder.find_cycles(graph) == [["/r/bar/bar.o", "/r/baz/baz.o"]]


def test_find_cycles_empty_for_acyclic_graph():
    index = BuildIndex()
    index.record(ClassifiedObject("/r/a/a.o", "a", ("main",), ("b",), True))
    index.record(ClassifiedObject("/r/b/b.o", "b", ("b",), ()))
    builder = GraphBuilder()

    assert builder.find_cycles(builder.build_link_graph(index)) == []
