import threading
from typing import List, Optional

from symbuild.common import bus
from symbuild.index import SymbolClassifier
from symbuild.spec import (
    BuildIndexProtocol,
    ClassifiedObject,
    SymbuildError,
    ToolchainProtocol,
)

from ..workspace import Workspace, dep_path_for, object_path_for


class PackageLoader:
    """
    Compiles the sources of a package and classifies the resulting objects.
    """

    def __init__(
        self,
        workspace: Workspace,
        toolchain: ToolchainProtocol,
        classifier: SymbolClassifier,
    ):
        self.workspace = workspace
        self.toolchain = toolchain
        self.classifier = classifier

    def compile_package(
        self, package: str, stop: Optional[threading.Event] = None
    ) -> List[ClassifiedObject]:
        """
        Compiles and classifies every source of `package` without touching
        any index, so packages can be processed concurrently.

        For each source the prerequisite description is generated first and
        then consumed to build the object. The first toolchain failure
        propagates and aborts the whole build.

        `stop` is shared by concurrently compiled packages: a failure sets it,
        and every package checks it before starting its next source.
        """
        if stop is not None and stop.is_set():
            bus.debug("build.package.cancelled", package=package)
            return []

        try:
            return self._compile_sources(package, stop)
        except SymbuildError:
            if stop is not None:
                stop.set()
            raise

    def _compile_sources(
        self, package: str, stop: Optional[threading.Event]
    ) -> List[ClassifiedObject]:
        bus.info("build.package.loading", package=package)
        sources = self.workspace.source_files(package)
        if not sources:
            bus.debug("build.package.empty", package=package)

        objects: List[ClassifiedObject] = []
        for source_path in sources:
            if stop is not None and stop.is_set():
                bus.debug("build.package.cancelled", package=package)
                break
            object_path = object_path_for(source_path)
            dep_path = dep_path_for(source_path)

            self.toolchain.generate_deps(source_path, dep_path, object_path)
            self.toolchain.compile(source_path, dep_path, object_path)

            bus.debug("build.object.populating", path=str(object_path))
            objects.append(self.classifier.classify(object_path, package))
        return objects

    def load_package(self, package: str, index: BuildIndexProtocol) -> bool:
        objects = self.compile_package(package)
        for obj in objects:
            index.record(obj)
        bus.debug("build.package.loaded", package=package, count=len(objects))
        return True
