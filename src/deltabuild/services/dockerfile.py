"""Dockerfile generation for the manylinux build image."""

from deltabuild.constants import DEFAULT_BASE_IMAGE, DEFAULT_PYTHON_BIN
from deltabuild.errors import BuildError
from deltabuild.errors_catalog import actionable_error


class DockerfileService:
    """Renders and writes the build-image definition."""

    NATIVE_BUILD_DEPS = (
        ("gcc", "gcc-c++", "make"),
        ("git", "wget", "curl", "ca-certificates"),
        ("openssl-devel", "libffi-devel", "zlib-devel", "bzip2", "bzip2-devel"),
        ("readline-devel", "sqlite-devel", "ncurses-devel", "gdbm-devel", "nss-devel"),
        ("xz", "xz-devel", "tk", "tk-devel", "which", "findutils"),
    )

    def __init__(self, logger, console):
        self.logger = logger
        self.console = console

    def render(
        self,
        base_image: str = DEFAULT_BASE_IMAGE,
        python_bin: str = DEFAULT_PYTHON_BIN,
    ) -> str:
        deps = " \\\n".join("      " + " ".join(group) for group in self.NATIVE_BUILD_DEPS)
        return f"""# Use a slim Debian base image
FROM {base_image} AS build

# Build arguments to allow setting user/group from host values.
ARG USER_ID=1000
ARG GROUP_ID=1000
ARG USER_NAME=user
ARG GROUP_NAME=user

# Always start as root for package install
USER root

# Install build deps via yum/dnf (no apt-get here).
# Note: manylinux images already include lots of toolchain bits.
RUN yum -y update && \\
    yum -y install \\
{deps} && \\
    yum clean all && rm -rf /var/cache/yum

# Create non-root user
RUN groupadd -g ${{GROUP_ID}} ${{GROUP_NAME}} && \\
    useradd -m -u ${{USER_ID}} -g ${{GROUP_NAME}} -s /bin/bash ${{USER_NAME}}

# Use the bundled Python 3.11 from manylinux (adjust if you need a different ABI)
ENV PYBIN={python_bin}

# Install uv with the manylinux Python
RUN ${{PYBIN}}/pip install --upgrade pip && \\
    ${{PYBIN}}/pip install uv

# Install Rust for the non-root user (keeps cargo in their home)
USER ${{USER_NAME}}
ENV HOME=/home/${{USER_NAME}}
WORKDIR ${{HOME}}
RUN curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | bash -s -- -y
ENV PATH="${{HOME}}/.cargo/bin:${{PATH}}"

# (Optional) expose the manylinux Python first on PATH for convenience
ENV PATH="${{PYBIN}}:${{PATH}}"

"""

    def write(self, path: str, content: str):
        """Overwrites ``path`` with ``content``; an existing file is replaced, never merged."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
        except OSError as exc:
            raise BuildError(
                actionable_error("dockerfile_write_failed", path=path, reason=exc.strerror or exc)
            ) from exc

        self.logger.debug("Wrote %s (%s bytes)", path, len(content.encode("utf-8")))
        self.console.print("[green]Dockerfile created.[/green]")
