#!/usr/bin/env python3
"""
Setup script for CountCraft package.
"""

from setuptools import setup, find_packages

setup(
    name="countcraft",
    version="0.3.0",
    description="Document statistics written into markdown front matter",
    author="CountCraft Team",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9",
        "rich>=13.0",
        "questionary>=2.0",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "markdown-it-py>=3.0",
        "beautifulsoup4>=4.12",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "countcraft=countcraft.cli.main:app",
        ],
    },
)
