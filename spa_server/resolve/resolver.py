import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Resolution:
    path: str
    # None when the request path climbs out of the served root
    file_path: Optional[str]
    extension: str

    @property
    def is_asset(self):
        """Missing assets get a 404; everything else falls back to the entry point."""
        return bool(self.extension)


def get_extension(path):
    segment = path.rsplit("/", 1)[-1]
    dot = segment.find(".")
    if dot < 0:
        return ""
    return segment[dot:]


def resolve(path, root):
    root = os.path.abspath(root)
    candidate = os.path.normpath(os.path.join(root, path.lstrip("/")))

    if os.path.commonpath([root, candidate]) != root:
        candidate = None

    return Resolution(path=path, file_path=candidate, extension=get_extension(path))
