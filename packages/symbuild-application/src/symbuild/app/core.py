import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional

from symbuild.analysis import DependencyResolver, GraphBuilder
from symbuild.common import BuildConfig, bus
from symbuild.index import BuildIndex, EntryPointMatcher, SymbolClassifier
from symbuild.spec import (
    LinkResult,
    Resolution,
    SymbolReaderProtocol,
    ToolchainProtocol,
    UsageError,
)

from .services import LinkInvoker, PackageLoader
from .workspace import Workspace


class SymbuildApp:
    def __init__(
        self,
        root_path: Path,
        toolchain: ToolchainProtocol,
        reader: SymbolReaderProtocol,
        config: Optional[BuildConfig] = None,
        jobs: Optional[int] = None,
    ):
        self.root_path = root_path
        self.config = config or BuildConfig()
        self.jobs = jobs or self.config.jobs

        # The app 'has a' loader and a linker; the toolchain and the symbol
        # reader are injected so tests can run without a compiler.
        self.workspace = Workspace(
            root_path,
            source_suffixes=self.config.source_suffixes,
            header_suffixes=self.config.header_suffixes,
        )
        matcher = EntryPointMatcher(self.config.entry_symbols, self.config.entry_match)
        self.classifier = SymbolClassifier(reader, matcher)
        self.loader = PackageLoader(self.workspace, toolchain, self.classifier)
        self.linker = LinkInvoker(toolchain)
        self.graph_builder = GraphBuilder()

    def run_build(
        self, target: str, dump_index: bool = False, explain: bool = False
    ) -> List[LinkResult]:
        """
        Loads every package, then resolves and links each entry point of
        `target`. Returns the produced binaries (empty when the target has no
        entry points).
        """
        bus.info("build.run.start", target=target)
        bus.info("build.run.root", root=str(self.root_path))
        if not self.workspace.has_package(target):
            raise UsageError(f"no package named '{target}' under {self.root_path}")

        index = self.load_all()
        if dump_index:
            self.dump_index(index)

        results = self.link_target(index, target, explain=explain)
        bus.success("build.run.success", target=target, count=len(results))
        return results

    def load_all(self) -> BuildIndex:
        """
        Loads every discovered package into a fresh index and freezes it.

        A package's entry point may reference symbols from a package that is
        discovered later, so nothing is resolved before this returns.
        """
        index = BuildIndex(quiet_symbols=self.config.entry_symbols)
        packages = self.workspace.packages

        if self.jobs <= 1 or len(packages) <= 1:
            for package in packages:
                self.loader.load_package(package, index)
        else:
            bus.info("build.run.jobs", jobs=self.jobs)
            stop = threading.Event()
            executor = ThreadPoolExecutor(max_workers=self.jobs)
            try:
                futures = [
                    executor.submit(self.loader.compile_package, package, stop)
                    for package in packages
                ]
                done, pending = wait(futures, return_when=FIRST_EXCEPTION)
                failed = [f for f in futures if f in done and f.exception()]
                if failed:
                    stop.set()
                    for future in pending:
                        future.cancel()
                    # Re-raises the failure of the earliest failed package.
                    failed[0].result()

                # Recording follows discovery order, which keeps the
                # first-definer-wins outcome independent of scheduling.
                for future in futures:
                    for obj in future.result():
                        index.record(obj)
            finally:
                executor.shutdown(wait=True, cancel_futures=True)

        index.freeze()
        bus.info(
            "index.summary",
            files=len(index),
            symbols=len(index.definers()),
            packages=len(index.packages()),
        )
        return index

    def link_target(
        self, index: BuildIndex, target: str, explain: bool = False
    ) -> List[LinkResult]:
        entry_points = index.entry_points_of(target)
        if not entry_points:
            bus.info("build.run.no_entry_points", target=target)
            return []

        resolver = DependencyResolver(index)
        results: List[LinkResult] = []
        for resolution in resolver.resolve_all(entry_points):
            bus.info(
                "link.resolve.closure",
                count=len(resolution),
                entry=resolution.entry_point,
            )
            if resolution.unresolved:
                bus.debug(
                    "link.resolve.unresolved",
                    count=len(resolution.unresolved),
                    entry=resolution.entry_point,
                    symbols=", ".join(resolution.unresolved),
                )
            if explain:
                self.explain(index, resolution)
            results.append(
                self.linker.link(resolution.entry_point, resolution.dependencies)
            )
        return results

    def explain(self, index: BuildIndex, resolution: Resolution) -> None:
        bus.info("link.explain.header", entry=resolution.entry_point)
        for path in resolution.dependencies:
            reason = resolution.reasons[path]
            bus.info(
                "link.explain.item",
                path=path,
                symbol=reason.symbol,
                requested_by=reason.requested_by,
            )
        graph = self.graph_builder.build_link_graph(index, resolution)
        for cycle in self.graph_builder.find_cycles(graph):
            bus.info("link.explain.cycle", members=", ".join(cycle))

    def dump_index(self, index: BuildIndex) -> None:
        bus.info("index.dump.header")
        for title, rows in index.dump():
            bus.info("index.dump.table", title=title)
            for key, value in rows:
                bus.info("index.dump.entry", key=key, value=value)
