import glob
from pathlib import Path

NU_SUFFIX = ".nu"
GLOB_CHARS = set("*?[")


def expand_patterns(patterns: list[str]) -> tuple[list[Path], list[str]]:
    """Expand CLI patterns into files.

    Directories are searched recursively for ``*.nu`` files, glob patterns
    are expanded, and plain paths are kept as given. Returns the files in
    first-seen order and the patterns that matched nothing.
    """
    files: list[Path] = []
    seen: set[Path] = set()
    unmatched: list[str] = []

    for pattern in patterns:
        path = Path(pattern)
        if path.is_dir():
            matches = sorted(p for p in path.rglob(f"*{NU_SUFFIX}") if p.is_file())
        elif GLOB_CHARS & set(pattern):
            matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_file())
        elif path.is_file():
            matches = [path]
        else:
            matches = []

        if not matches:
            unmatched.append(pattern)
        for match in matches:
            key = match.resolve()
            if key not in seen:
                seen.add(key)
                files.append(match)
    return files, unmatched
