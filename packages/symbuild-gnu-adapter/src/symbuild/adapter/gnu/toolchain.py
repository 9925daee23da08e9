import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from symbuild.common import ToolchainConfig, bus
from symbuild.spec import ToolchainError, ToolchainProtocol

Runner = Callable[..., "subprocess.CompletedProcess"]


class GnuToolchain(ToolchainProtocol):
    """
    Drives a GCC/Clang style compiler driver plus make.

    - deps:    <cxx> <cxxflags> -MF <src>.d -MM <src> -MT <obj>
    - compile: <make> -f <src>.d <obj>   (make's implicit rules do the work)
    - link:    <cxx> -o <binary> <inputs...> <ldflags>

    Every command blocks until it exits. Output is not captured so compiler
    diagnostics reach the terminal directly.
    """

    def __init__(
        self,
        config: Optional[ToolchainConfig] = None,
        runner: Optional[Runner] = None,
    ):
        self.config = config or ToolchainConfig()
        self._runner = runner or subprocess.run

    def deps_command(
        self, source_path: Path, dep_path: Path, object_path: Path
    ) -> List[str]:
        return [
            self.config.cxx,
            *self.config.cxxflags,
            "-MF",
            str(dep_path),
            "-MM",
            str(source_path),
            "-MT",
            str(object_path),
        ]

    def compile_command(
        self, source_path: Path, dep_path: Path, object_path: Path
    ) -> List[str]:
        command = [self.config.make, "-f", str(dep_path), f"CXX={self.config.cxx}"]
        if self.config.cxxflags:
            command.append(f"CXXFLAGS={' '.join(self.config.cxxflags)}")
        command.append(str(object_path))
        return command

    def link_command(self, inputs: Sequence[Path], output_path: Path) -> List[str]:
        return [
            self.config.cxx,
            "-o",
            str(output_path),
            *(str(p) for p in inputs),
            *self.config.ldflags,
        ]

    def generate_deps(
        self, source_path: Path, dep_path: Path, object_path: Path
    ) -> None:
        self._run(self.deps_command(source_path, dep_path, object_path))

    def compile(self, source_path: Path, dep_path: Path, object_path: Path) -> None:
        self._run(self.compile_command(source_path, dep_path, object_path))

    def link(self, inputs: Sequence[Path], output_path: Path) -> None:
        self._run(self.link_command(inputs, output_path))

    def _run(self, command: List[str]) -> None:
        bus.info("toolchain.exec", command=shlex.join(command))
        try:
            result = self._runner(command, check=False)
        except OSError as e:
            raise ToolchainError(command, detail=str(e)) from e
        # A negative return code means the process was killed by a signal.
        if result.returncode != 0:
            raise ToolchainError(command, returncode=result.returncode)
