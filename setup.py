"""
Setup script for tasklist.
"""
from setuptools import setup, find_packages

setup(
    name="tasklist",
    version="0.1.0",
    description="Minimal task management REST API with a command-line client",
    packages=find_packages(include=["tasklist", "tasklist.*"]),
    install_requires=[
        "fastapi>=0.110.0",
        "starlette>=0.36.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "click>=8.1.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tasklist=tasklist.__main__:main",
            "tasks=tasklist.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
