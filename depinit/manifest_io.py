"""Reading and writing package.json and friends."""

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Callable

from .models import Manifest

PACKAGE_JSON = "package.json"
BOWER_JSON = "bower.json"


def strip_json_comments(content: str) -> str:
    """Remove ``//`` and ``/* */`` comments that are not inside strings."""
    result = []
    i = 0
    length = len(content)
    in_string = False

    while i < length:
        char = content[i]

        if in_string:
            result.append(char)
            if char == "\\" and i + 1 < length:
                result.append(content[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            result.append(char)
            i += 1
        elif content.startswith("//", i):
            end = content.find("\n", i)
            i = length if end == -1 else end
        elif content.startswith("/*", i):
            end = content.find("*/", i + 2)
            i = length if end == -1 else end + 2
        else:
            result.append(char)
            i += 1

    return "".join(result)


def read_json_file(path: str | Path, allow_comments: bool = False) -> Any | None:
    """Parse a JSON file, returning None when it does not exist."""
    file_path = Path(path).resolve()
    if not file_path.exists():
        return None

    content = file_path.read_text(encoding="utf-8")
    if allow_comments:
        content = strip_json_comments(content)
    return json.loads(content)


def _dump(content: Any) -> str:
    return f"{json.dumps(content, indent=2, ensure_ascii=False)}\n"


def write_json_file(path: str | Path, content: Any) -> bool:
    """Overwrite an existing JSON file. Returns False if there is nothing to overwrite."""
    file_path = Path(path).resolve()
    if not file_path.exists():
        return False

    file_path.write_text(_dump(content), encoding="utf-8")
    return True


def read_package_json(cwd: str | Path = ".") -> Manifest | None:
    data = read_json_file(Path(cwd) / PACKAGE_JSON)
    if data is None:
        return None
    return Manifest.from_dict(data)


def write_package_json(manifest: Manifest, cwd: str | Path = ".") -> None:
    (Path(cwd) / PACKAGE_JSON).write_text(_dump(manifest.to_dict()), encoding="utf-8")


def npm_init(cwd: str | Path = ".", runner: Callable[..., Any] | None = None) -> None:
    """Create a default package.json with ``npm init -y``."""
    run = runner or subprocess.run
    run([shutil.which("npm") or "npm", "init", "-y"], cwd=str(cwd), stdout=subprocess.DEVNULL)


def retrieve_package_json(
    cwd: str | Path = ".", runner: Callable[..., Any] | None = None
) -> Manifest:
    """Read package.json, creating it with ``npm init`` when missing."""
    existing = read_package_json(cwd)
    if existing is not None:
        return existing

    npm_init(cwd, runner)
    return read_package_json(cwd) or Manifest()


def read_bower_json(cwd: str | Path = ".") -> Any | None:
    return read_json_file(Path(cwd) / BOWER_JSON)
