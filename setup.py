"""
Setup script for spmat

Pure-Python package laid out under src/. The version is read from
src/spmat/__init__.py and the long description from README.md when present.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/spmat/__init__.py
def get_version():
    version_file = Path("src/spmat/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="spmat",
    version=get_version(),
    description="Sparse matrix with coordinate and compressed (CSR/CSC) storage",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.22.4",
        "scipy>=1.12",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "spmat=spmat.cli:main",
        ],
    },
    zip_safe=True,
)
