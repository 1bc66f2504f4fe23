from setuptools import setup, find_packages

setup(
    name="flagshell",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "flagshell=flagshell.cli:main",
        ],
    },
    description="Command shell for feature-flag resources with an edit-diff-patch workflow.",
)
