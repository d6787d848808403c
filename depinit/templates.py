"""Project template copying."""

import shutil
from pathlib import Path

from .errors import UnsupportedFormatError
from .models import StoryFormat


def copy_template(
    template_root: str | Path, story_format: StoryFormat, destination: str | Path = "."
) -> None:
    """Copy ``template-<format>/`` over the destination directory.

    TypeScript templates fall back to the plain CSF template when a
    framework does not ship one.
    """
    template_dir = Path(template_root).resolve() / f"template-{story_format.value}"
    if not template_dir.is_dir():
        if story_format is StoryFormat.CSF_TYPESCRIPT:
            copy_template(template_root, StoryFormat.CSF, destination)
            return

        raise UnsupportedFormatError(f"Unsupported story format: {story_format.value}")

    shutil.copytree(template_dir, destination, dirs_exist_ok=True)
