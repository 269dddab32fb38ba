from setuptools import find_namespace_packages, setup

setup(
    name="sizecheck",
    version="0.1.0",
    description="Project and dependency directory size report generator",
    packages=find_namespace_packages(include=["sizecheck", "sizecheck.*"]),
    python_requires=">=3.11",
    install_requires=[
        "result>=0.16",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "sizecheck=sizecheck.cli:app",
        ],
    },
)
