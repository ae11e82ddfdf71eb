try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pathlib import Path

import aquametrics


def test_version_consistency():
    """Verify that pyproject.toml version matches package __version__."""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        pyproject_data = tomllib.load(f)

    pyproject_version = pyproject_data["project"]["version"]
    package_version = aquametrics.__version__

    assert pyproject_version == package_version, (
        "Version mismatch: "
        f"pyproject.toml ({pyproject_version}) != package ({package_version})"
    )


def test_bundled_rates_declared_as_package_data():
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        pyproject_data = tomllib.load(f)

    package_data = pyproject_data["tool"]["setuptools"]["package-data"]
    assert "*.json" in package_data["aquametrics.data"]
