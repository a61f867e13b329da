"""Verify package imports work correctly."""


def test_import_turbomd() -> None:
    """Test that turbomd can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import turbomd

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert turbomd.__version__ == expected


def test_public_names_exist() -> None:
    import turbomd

    missing = [name for name in turbomd.__all__ if not hasattr(turbomd, name)]
    assert missing == []


def test_python_m_entry_point() -> None:
    import importlib.util

    assert importlib.util.find_spec("turbomd.__main__") is not None
