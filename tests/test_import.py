"""Verify package imports work correctly."""


def test_import_llaves() -> None:
    """Test that llaves can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import llaves

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert llaves.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from llaves import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api_exported() -> None:
    """Every name in __all__ resolves."""
    import llaves

    for name in llaves.__all__:
        assert hasattr(llaves, name), name


def test_logger_namespace() -> None:
    """Module loggers live under the llaves namespace."""
    from llaves.utils import get_logger

    assert get_logger("navigation.engine").name == "llaves.navigation.engine"
    assert get_logger("llaves.table").name == "llaves.table"


def test_library_logging_is_silent_by_default() -> None:
    """The package root logger carries a NullHandler."""
    import logging

    import llaves  # noqa: F401

    handlers = logging.getLogger("llaves").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
