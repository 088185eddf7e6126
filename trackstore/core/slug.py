import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def create_slug(text: str) -> str:
    """
    Convert a title to a URL-friendly kebab-case slug.

    Example:
      create_slug("Hello World!")            -> "hello-world"
      create_slug("My Awesome Track - 2023") -> "my-awesome-track-2023"
    """
    slug = text.lower().strip()
    slug = _NON_WORD.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")
