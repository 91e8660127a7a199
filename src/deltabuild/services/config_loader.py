"""Configuration loader for deltabuild."""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from deltabuild.errors import BuildError


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults."""

    KEY_TYPES: Dict[str, Tuple[type, ...]] = {
        "workdir": (str,),
        "image_tag": (str,),
        "base_image": (str,),
        "python_bin": (str,),
        "build_subdir": (str,),
        "maturin_extra_args": (str,),
        "verbose": (bool,),
        "log_file": (str,),
        "dry_run": (bool,),
        "command_timeout": (int, float),
    }
    # Resolved against the directory holding the config file.
    PATH_KEYS = ("workdir", "log_file")

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise BuildError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise BuildError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise BuildError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - set(self.KEY_TYPES))
        if unknown:
            unknown_list = ", ".join(unknown)
            raise BuildError(f"Unknown configuration keys: {unknown_list}")

        for key, value in parsed.items():
            self._check_type(key, value)

        base_dir = path.resolve().parent
        for key in self.PATH_KEYS:
            if key in parsed:
                parsed[key] = str(base_dir / Path(parsed[key]).expanduser())

        return parsed

    def _check_type(self, key: str, value: Any):
        expected = self.KEY_TYPES[key]
        # bool is an int subclass; `command_timeout: true` is a mistake.
        if isinstance(value, bool) and bool not in expected:
            valid = False
        else:
            valid = isinstance(value, expected)

        if not valid:
            names = " or ".join(t.__name__ for t in expected)
            raise BuildError(
                f"Configuration key '{key}' must be {names}, got {type(value).__name__}."
            )
