"""Package-level smoke tests."""

import mediacompat


def test_version_is_set() -> None:
    """Package should expose a version string."""
    assert isinstance(mediacompat.__version__, str)
    assert mediacompat.__version__
