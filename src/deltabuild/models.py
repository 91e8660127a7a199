"""Shared domain models for deltabuild."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class HostIdentity:
    """Host user and group the in-image user is created to match."""

    uid: int
    gid: int
    user_name: str
    group_name: str

    def build_args(self) -> Dict[str, str]:
        return {
            "USER_ID": str(self.uid),
            "GROUP_ID": str(self.gid),
            "USER_NAME": self.user_name,
            "GROUP_NAME": self.group_name,
        }


@dataclass(frozen=True)
class BuildPlan:
    """Paths, names and flags resolved once per execution."""

    workdir: str
    dockerfile_path: str
    image_tag: str
    base_image: str
    python_bin: str
    container_project_dir: str
    build_subdir: str
    maturin_extra_args: str

    @property
    def container_build_dir(self) -> str:
        return f"{self.container_project_dir}/{self.build_subdir}"


@dataclass
class StepResult:
    name: str
    status: str
    returncode: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
