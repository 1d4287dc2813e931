#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="subsift",
    version="1.0.0",
    description="Passive subdomain discovery from certificate transparency and passive DNS sources",
    author="SUBSIFT Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "dnspython",
        "requests",
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "subsift=subsift.cli:main",
        ],
    },
    python_requires=">=3.9",
)
