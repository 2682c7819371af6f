import os


def normalize_path(path: str) -> str:
    """
    Canonicalize a path string for comparison.

    Separators become "/", then one leading "./" and one leading "/" are
    stripped. Purely syntactic: nothing is checked against the filesystem.
    """
    normalized = path.replace("\\", "/")
    if os.sep != "/":
        normalized = normalized.replace(os.sep, "/")
    if normalized.startswith("./"):
        normalized = normalized[2:]
    if normalized.startswith("/"):
        normalized = normalized[1:]
    return normalized
