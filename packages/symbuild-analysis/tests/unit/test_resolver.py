import pytest

from symbuild.analysis import DependencyResolver
from symbuild.index import BuildIndex
from symbuild.spec import ClassifiedObject


def _index(*objects):
    index = BuildIndex()
    for path, exported, undefined in objects:
        package = path.split("/")[2]
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


@pytest.fixture
def chain_index():
    # main -> bar -> baz -> qux, plus an unrelated object
    return _index(
        ("/r/foo/main.o", ["main"], ["bar_init", "printf"]),
        ("/r/bar/bar.o", ["bar_init"], ["baz_init"]),
        ("/r/baz/baz.o", ["baz_init"], ["qux_init"]),
        ("/r/qux/qux.o", ["qux_init"], []),
        ("/r/zzz/unused.o", ["unused"], []),
    )


def test_transitive_closure_in_discovery_order(chain_index):
    resolution = DependencyResolver(chain_index).resolve("/r/foo/main.o")

    assert resolution.dependencies == ["/r/bar/bar.o", "/r/baz/baz.o", "/r/qux/qux.o"]
    assert "/r/zzz/unused.o" not in resolution


def test_reasons_record_requesting_file(chain_index):
    resolution = DependencyResolver(chain_index).resolve("/r/foo/main.o")

    reason = resolution.reasons["/r/baz/baz.o"]
    assert reason.requested_by == "/r/bar/bar.o"
    assert reason.symbol == "baz_init"


def test_unresolved_symbols_are_skipped(chain_index):
    resolution = DependencyResolver(chain_index).resolve("/r/foo/main.o")

    assert resolution.unresolved == ["printf"]


def test_entry_with_only_external_symbols_has_no_dependencies():
    index = _index(("/r/foo/main.o", ["main"], ["printf", "malloc"]))

    resolution = DependencyResolver(index).resolve("/r/foo/main.o")

    assert resolution.dependencies == []
    assert resolution.unresolved == ["printf", "malloc"]


def test_symbols_defined_in_entry_package_are_pulled_in():
    index = _index(
        ("/r/foo/main.o", ["main"], ["foo_helper"]),
        ("/r/foo/helper.o", ["foo_helper"], []),
    )

    resolution = DependencyResolver(index).resolve("/r/foo/main.o")

    assert resolution.dependencies == ["/r/foo/helper.o"]


def test_cycle_back_to_entry_terminates_and_excludes_entry():
    index = _index(
        ("/r/a/a.o", ["main", "a_sym"], ["b_sym"]),
        ("/r/b/b.o", ["b_sym"], ["a_sym"]),
    )

    resolution = DependencyResolver(index).resolve("/r/a/a.o")

    assert resolution.dependencies == ["/r/b/b.o"]


def test_cycle_between_dependencies_terminates():
    index = _index(
        ("/r/foo/main.o", ["main"], ["x"]),
        ("/r/x/x.o", ["x"], ["y"]),
        ("/r/y/y.o", ["y"], ["x"]),
    )

    resolution = DependencyResolver(index).resolve("/r/foo/main.o")

    assert resolution.dependencies == ["/r/x/x.o", "/r/y/y.o"]


def test_diamond_lists_shared_dependency_once():
    index = _index(
        ("/r/foo/main.o", ["main"], ["left", "right"]),
        ("/r/l/l.o", ["left"], ["base"]),
        ("/r/rr/r.o", ["right"], ["base"]),
        ("/r/base/base.o", ["base"], []),
    )

    resolution = DependencyResolver(index).resolve("/r/foo/main.o")

    assert resolution.dependencies == ["/r/l/l.o", "/r/rr/r.o", "/r/base/base.o"]
    assert resolution.reasons["/r/base/base.o"].requested_by == "/r/l/l.o"


def test_resolving_twice_is_idempotent(chain_index):
    resolver = DependencyResolver(chain_index)

    first = resolver.resolve("/r/foo/main.o")
    second = resolver.resolve("/r/foo/main.o")

    assert first.dependency_set == second.dependency_set
    assert first.dependencies == second.dependencies


def test_every_dependency_is_justified(chain_index):
    resolution = DependencyResolver(chain_index).resolve("/r/foo/main.o")
    members = {resolution.entry_point, *resolution.dependencies}

    for dependency in resolution.dependencies:
        reason = resolution.reasons[dependency]
        assert reason.requested_by in members
        assert reason.symbol in chain_index.undefined_of(reason.requested_by)
        assert chain_index.definer_of(reason.symbol) == dependency


def test_resolve_all_keeps_entry_points_independent():
    index = _index(
        ("/r/foo/main.o", ["main"], ["shared"]),
        ("/r/foo/tool.o", ["main2"], ["only_tool"]),
        ("/r/lib/shared.o", ["shared"], []),
        ("/r/lib/tool_dep.o", ["only_tool"], []),
    )

    first, second = DependencyResolver(index).resolve_all(
        ["/r/foo/main.o", "/r/foo/tool.o"]
    )

    assert first.dependencies == ["/r/lib/shared.o"]
    assert second.dependencies == ["/r/lib/tool_dep.o"]
