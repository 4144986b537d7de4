"""
sievecache - SIEVE Caching for Python

A thread-safe, fixed-capacity in-memory cache using the SIEVE eviction policy:
one visited bit per entry and a persistent hand instead of LRU reordering.
"""

import os
import re
from setuptools import setup, find_packages

# Read the README for the long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Get package version
with open(os.path.join("sievecache", "__init__.py"), "r", encoding="utf-8") as f:
    version_match = re.search(r'^__version__ = ["\']([^\"\']+)[\"\']', f.read(), re.MULTILINE)
    if version_match:
        VERSION = version_match.group(1)
    else:
        raise RuntimeError("Unable to find version string in sievecache/__init__.py")

# Core dependencies
install_requires = [
    "numpy>=1.19.0",
    "pydantic>=2.0.0,<3.0.0",
]

# Optional dependencies
extras_require = {
    # Benchmark harness under examples/
    "bench": ["tqdm>=4.0.0"],

    # Development and testing
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "black>=22.0.0",
        "isort>=5.0.0",
        "mypy>=0.990",
    ],
}

# Create 'all' extra that includes all optional dependencies
extras_require["all"] = list(
    {dep for name, deps in extras_require.items() if name != "dev" for dep in deps}
)

setup(
    name="sievecache",
    version=VERSION,
    author="sievecache contributors",
    description="A thread-safe in-memory cache with SIEVE eviction",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    package_data={
        "sievecache": ["py.typed"],
    },
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Typing :: Typed",
    ],
    keywords=[
        "cache",
        "sieve",
        "eviction",
        "lru",
        "in-memory",
    ],
    zip_safe=False,
)
