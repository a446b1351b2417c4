from __future__ import annotations

import os
import sys

from setuptools import find_packages, setup

dependencies = [
    "chia_rs>=0.21.0",  # Coin, CoinSpend, SpendBundle, BLS keys, clvm runtime and tree hashing
    "chia_puzzles_py>=0.20.1",  # Compiled standard puzzles and TAILs
    "clvm>=0.9.10",  # Program.to and the SExp tree
    "colorlog>=6.8.2",  # Adds color to logs
    "concurrent-log-handler>=0.9.25",  # Concurrently log and rotate logs
    "importlib_resources>=6.1.1",  # Reads the puzzle hex files and initial config shipped with the package
    "PyYAML>=6.0.1",  # Used for config file format
    "typing-extensions>=4.10.0",  # typing backports like Protocol and Self
]

dev_dependencies = [
    "build>=1.0.3",
    "coverage>=7.4.1",
    "pytest>=8.0.2",
    "pytest-cov>=4.1.0",
    "pytest-xdist>=3.5.0",
    "isort>=5.13.2",
    "flake8>=7.0.0",
    "mypy>=1.8.0",
    "black>=23.12.1",
    "types-pyyaml>=6.0.12.12",
    "types-setuptools>=69.1.0.20240217",
]

kwargs = dict(
    name="chia-dog",
    description="Driver for DOG tokens: supply restricted coins spent together in rings.",
    license="Apache License",
    python_requires=">=3.9, <4",
    keywords="chia clvm token driver",
    install_requires=dependencies,
    extras_require=dict(
        dev=dev_dependencies,
    ),
    packages=find_packages(include=["chia_dog", "chia_dog.*"]),
    package_data={
        "": ["*.clsp.hex", "py.typed"],
        "chia_dog.util": ["initial-*.yaml"],
    },
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    zip_safe=False,
)

if "setup_file" in sys.modules:
    # include dev deps in regular deps when run in snyk
    dependencies.extend(dev_dependencies)

if len(os.environ.get("CHIA_DOG_SKIP_SETUP", "")) < 1:
    setup(**kwargs)  # type: ignore
