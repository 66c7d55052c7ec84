# setup.py
from setuptools import setup, find_packages

setup(
    name="tunnel_db",
    version="0.1.0",
    description="Dialect-aware SQL execution layer for the tunnel management backend",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "build",
            "dist",
        )
    ),
    install_requires=[
        "psycopg[binary]>=3.2",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    python_requires=">=3.10",
)
