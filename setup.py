# pylint: disable=missing-module-docstring
from pathlib import Path

from setuptools import setup, find_packages

requirements = [
    "attrs",
    "click",
    "colorama",
    "msgspec",
    "prometheus_client",
    "ruamel.yaml",
]

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="typedpipe",
    version="1.0.0",
    description="typedpipe processes typed values with a pipeline of asynchronous processors "
    "and stores the results in a type-constrained store.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="LGPL-2.1 license",
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["setuptools"] + requirements,
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
        ]
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "typedpipe = typedpipe.run_typedpipe:main",
        ]
    },
)
