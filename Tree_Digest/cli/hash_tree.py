import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from Tree_Digest.core.models import HashSettings, ResultEntry
from Tree_Digest.core.walker import hash_tree_async
from Tree_Digest.output.writer import display_path, format_line, write_hashes
from Tree_Digest.utils.logger import log


# ----------------------------
# Settings
# ----------------------------

SETTINGS_DIR = ".tree_digest"
SETTINGS_FILE = "settings.json"

DEFAULT_SETTINGS = {
    "hash": {
        "algorithm": "sha512",
        "buffer_size": 8192,
    },
    "output": {
        "path": None,
        "relative_paths": False,
    },
    "logging": {"level": "WARNING"},
    "run": {"timeout": None},
}


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_SETTINGS))


def load_settings(
    project_root: Optional[Path] = None,
    settings_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Load settings.json and merge it over DEFAULT_SETTINGS.

    An explicit settings_path must exist. Otherwise
    <project_root>/.tree_digest/settings.json is used when present,
    project_root defaulting to the current directory.
    """
    if settings_path is not None:
        settings_path = Path(settings_path)
        if not settings_path.exists():
            raise FileNotFoundError(f"Settings file [{settings_path}] not found")
    else:
        root = Path(project_root) if project_root is not None else Path.cwd()
        settings_path = root / SETTINGS_DIR / SETTINGS_FILE

    merged = _defaults()

    if not settings_path.exists():
        return merged

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            user_settings = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid settings file [{settings_path}]: {exc}") from exc

    if not isinstance(user_settings, dict):
        raise ValueError(f"Invalid settings file [{settings_path}]: expected an object")

    for k, v in user_settings.items():
        if k in DEFAULT_SETTINGS and not isinstance(v, dict):
            raise ValueError(
                f"Invalid settings file [{settings_path}]: section '{k}' must be an object"
            )
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k].update(v)
        else:
            merged[k] = v

    log("DEBUG", "settings", f"Loaded settings from {settings_path}")
    return merged


def apply_overrides(settings: Dict[str, Any], **overrides) -> Dict[str, Any]:
    """
    Apply command-line values over loaded settings. None means "not given".
    """
    mapping = {
        "algorithm": ("hash", "algorithm"),
        "buffer_size": ("hash", "buffer_size"),
        "output": ("output", "path"),
        "relative_paths": ("output", "relative_paths"),
        "log_level": ("logging", "level"),
        "timeout": ("run", "timeout"),
    }

    for key, value in overrides.items():
        if value is None:
            continue
        section, name = mapping[key]
        settings.setdefault(section, {})[name] = value

    return settings


def _print_hashes(
    entries: List[ResultEntry],
    relative_to: Optional[Path],
    stream: Optional[TextIO] = None,
) -> None:
    lines = (format_line(display_path(e.path, relative_to), e.digest) for e in entries)

    if stream is not None:
        for line in lines:
            stream.write(line)
        return

    # raw bytes, so names that are not valid UTF-8 print as they are on disk
    sys.stdout.flush()
    out = sys.stdout.buffer
    for line in lines:
        out.write(line.encode("utf-8", "surrogateescape"))
    out.flush()


# ----------------------------
# CLI Orchestrator
# ----------------------------

async def run(
    *,
    root: Path,
    settings: Optional[Dict[str, Any]] = None,
    project_root: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> List[ResultEntry]:
    """
    Hash root and send the result to the configured sink.

    With settings["output"]["path"] set, lines are written to that file;
    otherwise they are printed to stream (stdout by default).
    """
    if settings is None:
        settings = load_settings(project_root)

    hash_settings = HashSettings(
        algorithm=settings["hash"]["algorithm"],
        buffer_size=settings["hash"]["buffer_size"],
    )

    root = Path(root)
    output = settings["output"].get("path")
    relative_to = root.parent if settings["output"].get("relative_paths") else None

    entries = await hash_tree_async(
        root,
        hash_settings.algorithm,
        hash_settings.buffer_size,
        timeout=settings["run"].get("timeout"),
    )

    if output:
        write_hashes(entries, Path(output), relative_to=relative_to)
    else:
        _print_hashes(entries, relative_to, stream)

    return entries
