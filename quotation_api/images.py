import re

_IMAGE_EXTENSION = re.compile(r"\.(jpeg|jpg|gif|png|webp)$", re.IGNORECASE)


def is_direct_image(ref: str) -> bool:
    """True when ``ref`` is a data URI or an http(s) link straight to a raster image."""
    if not ref:
        return False
    if ref.startswith("data:"):
        return True
    return ref.startswith("http") and bool(_IMAGE_EXTENSION.search(ref.split("?", 1)[0]))
