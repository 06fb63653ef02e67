"""
Setup script for the flip6-engine package.

Installs the ``flip6`` package from ``src/`` together with its SQLite
schema, and the ``flip6`` console command.
"""

from setuptools import setup, find_packages

setup(
    name="flip6-engine",
    version="1.0.0",
    description="Flip 6 session engine - deck, turns, actions, scoring and reconnection",
    author="Flip 6 Team",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "flip6._store": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "flip6=flip6.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
