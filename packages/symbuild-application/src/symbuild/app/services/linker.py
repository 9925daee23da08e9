from pathlib import Path
from typing import Sequence

from symbuild.common import bus
from symbuild.spec import LinkResult, ToolchainProtocol

OBJECT_SUFFIX = ".o"


def binary_path_for(object_path: str) -> str:
    # /root/foo/main.o -> /root/foo/main
    if object_path.endswith(OBJECT_SUFFIX):
        return object_path[: -len(OBJECT_SUFFIX)]
    return object_path


class LinkInvoker:
    def __init__(self, toolchain: ToolchainProtocol):
        self.toolchain = toolchain

    def link(self, entry_point: str, dependencies: Sequence[str]) -> LinkResult:
        """
        Links the entry point and its dependency closure into one executable
        named after the entry point's object file.
        """
        binary = binary_path_for(entry_point)
        inputs = [entry_point, *dependencies]
        self.toolchain.link([Path(p) for p in inputs], Path(binary))
        bus.success("link.binary.success", binary=binary)
        return LinkResult(entry_point=entry_point, binary=binary, inputs=inputs)
