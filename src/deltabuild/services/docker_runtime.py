"""Docker image build and container run services for deltabuild."""

import shlex
from typing import Callable, List

from deltabuild.models import BuildPlan, HostIdentity


class DockerRuntimeService:
    """Builds the docker command lines and runs them through ``run_cmd``."""

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    def build_image_cmd(self, plan: BuildPlan, identity: HostIdentity) -> List[str]:
        cmd = ["docker", "build"]
        for name, value in identity.build_args().items():
            cmd += ["--build-arg", f"{name}={value}"]
        cmd += ["-t", plan.image_tag, "."]
        return cmd

    def container_shell_command(self, plan: BuildPlan) -> str:
        return " && ".join(
            [
                f"cd {shlex.quote(plan.container_build_dir)}",
                "make clean",
                f"export MATURIN_EXTRA_ARGS={shlex.quote(plan.maturin_extra_args)}",
                "make build",
            ]
        )

    def run_container_cmd(self, plan: BuildPlan) -> List[str]:
        return [
            "docker",
            "run",
            "--rm=true",
            "-v",
            f"{plan.workdir}:{plan.container_project_dir}",
            plan.image_tag,
            "/bin/bash",
            "-c",
            self.container_shell_command(plan),
        ]

    def build_image(self, plan: BuildPlan, identity: HostIdentity, run_cmd: Callable):
        self.console.print(f"[blue]Building image {plan.image_tag}...[/blue]")
        self.logger.info("Building image %s as %s", plan.image_tag, identity.user_name)
        run_cmd(self.build_image_cmd(plan, identity), cwd=plan.workdir)
        self.console.print("[green]Docker image built successfully.[/green]")

    def run_container(self, plan: BuildPlan, run_cmd: Callable):
        self.console.print("[blue]Running wheel build in container...[/blue]")
        self.logger.info("Mounting %s at %s", plan.workdir, plan.container_project_dir)
        run_cmd(self.run_container_cmd(plan), cwd=plan.workdir)
        self.console.print("[green]Wheel build finished.[/green]")
