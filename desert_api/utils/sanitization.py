from urllib.parse import quote


def quote_path_segment(value: str) -> str:
    """
    Escape a caller supplied id for use as a single URL path segment.

    Slashes, query and fragment characters are percent-encoded, and so are dots
    so that "." and ".." can't be treated as relative path segments.
    """
    return quote(str(value), safe="").replace(".", "%2E")
