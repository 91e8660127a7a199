import logging
import os
import shlex
from typing import Callable, List, Optional, Tuple

from rich.console import Console

from .constants import (
    CONTAINER_PROJECT_NAME,
    DEFAULT_BASE_IMAGE,
    DEFAULT_BUILD_SUBDIR,
    DEFAULT_IMAGE_TAG,
    DEFAULT_MATURIN_EXTRA_ARGS,
    DEFAULT_PYTHON_BIN,
    DOCKERFILE_NAME,
    EXIT_INTERRUPTED,
)
from .errors import BuildError
from .errors_catalog import actionable_error
from .models import BuildPlan, HostIdentity, StepResult
from .services.command_runner import CommandRunner
from .services.docker_runtime import DockerRuntimeService
from .services.dockerfile import DockerfileService
from .services.identity import IdentityService

console = Console()
logger = logging.getLogger("deltabuild")


class DeltaBuilder:
    """Writes the Dockerfile, builds the image and runs the wheel build, stopping at the first failure."""

    def __init__(
        self,
        workdir: Optional[str] = None,
        image_tag: str = DEFAULT_IMAGE_TAG,
        base_image: str = DEFAULT_BASE_IMAGE,
        python_bin: str = DEFAULT_PYTHON_BIN,
        build_subdir: str = DEFAULT_BUILD_SUBDIR,
        maturin_extra_args: str = DEFAULT_MATURIN_EXTRA_ARGS,
        dry_run: bool = False,
        command_timeout: Optional[float] = None,
        identity: Optional[HostIdentity] = None,
    ):
        self.workdir = os.path.abspath(workdir or os.getcwd())
        if not os.path.isdir(self.workdir):
            raise BuildError(actionable_error("workdir_not_found", path=self.workdir))

        self.dry_run = dry_run
        self.results: List[StepResult] = []

        self.identity_service = IdentityService(logger=logger)
        self.command_runner = CommandRunner(logger=logger, default_timeout=command_timeout)
        self.dockerfile_service = DockerfileService(logger=logger, console=console)
        self.docker_runtime_service = DockerRuntimeService(logger=logger, console=console)

        self.identity = identity or self.identity_service.resolve()
        self.plan = BuildPlan(
            workdir=self.workdir,
            dockerfile_path=os.path.join(self.workdir, DOCKERFILE_NAME),
            image_tag=image_tag,
            base_image=base_image,
            python_bin=python_bin,
            container_project_dir=f"/home/{self.identity.user_name}/{CONTAINER_PROJECT_NAME}",
            build_subdir=build_subdir,
            maturin_extra_args=maturin_extra_args,
        )

    def _run_cmd(self, cmd: List[str], cwd: Optional[str] = None):
        return self.command_runner.run(cmd, cwd=cwd)

    def _run_step(self, name: str, callback: Callable, *args) -> StepResult:
        logger.debug("Step started: %s", name)
        try:
            callback(*args)
        except BuildError as exc:
            logger.debug("Step failed: %s (exit %s)", name, exc.returncode)
            return StepResult(name=name, status="failed", returncode=exc.returncode, error=str(exc))

        logger.debug("Step finished: %s", name)
        return StepResult(name=name, status="success")

    def steps(self) -> List[Tuple[str, Callable]]:
        return [
            ("write_dockerfile", self.write_dockerfile),
            ("build_image", self.build_image),
            ("run_build", self.run_build),
        ]

    def write_dockerfile(self):
        content = self.dockerfile_service.render(
            base_image=self.plan.base_image,
            python_bin=self.plan.python_bin,
        )
        self.dockerfile_service.write(self.plan.dockerfile_path, content)

    def build_image(self):
        self.docker_runtime_service.build_image(self.plan, self.identity, self._run_cmd)

    def run_build(self):
        self.docker_runtime_service.run_container(self.plan, self._run_cmd)

    def print_plan(self):
        build_cmd = self.docker_runtime_service.build_image_cmd(self.plan, self.identity)
        run_cmd = self.docker_runtime_service.run_container_cmd(self.plan)

        console.print("[bold blue]Dry run: nothing will be written or executed.[/bold blue]")
        console.print(f"Dockerfile: {self.plan.dockerfile_path}")
        console.print(f"Build: {shlex.join(build_cmd)}", markup=False)
        console.print(f"Run:   {shlex.join(run_cmd)}", markup=False)

    def run(self) -> int:
        try:
            logger.info("Starting deltabuild in %s", self.workdir)

            if self.dry_run:
                self.print_plan()
                return 0

            for name, callback in self.steps():
                result = self._run_step(name, callback)
                self.results.append(result)
                if not result.ok:
                    console.print(f"[bold red]Error:[/bold red] {result.error}")
                    logger.error("Step '%s' failed: %s", result.name, result.error)
                    return result.returncode

            console.print("[bold green]Build finished.[/bold green]")
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return EXIT_INTERRUPTED
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
