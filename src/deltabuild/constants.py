"""Built-in defaults for deltabuild."""

DEFAULT_IMAGE_TAG = "delta-rs-build"
DEFAULT_BASE_IMAGE = "quay.io/pypa/manylinux_2_28_x86_64"
DEFAULT_PYTHON_BIN = "/opt/python/cp311-cp311/bin"
DEFAULT_BUILD_SUBDIR = "python"
DEFAULT_MATURIN_EXTRA_ARGS = "--release --compatibility manylinux_2_28"
DEFAULT_CONFIG_FILE = ".deltabuild.yml"

DOCKERFILE_NAME = "Dockerfile"
CONTAINER_PROJECT_NAME = "delta-rs"

EXIT_COMMAND_TIMEOUT = 124
EXIT_COMMAND_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_INTERRUPTED = 130
