from setuptools import setup, find_packages

setup(
    name="nupkg-metadata",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pytz",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "pytest-mock",
            "mypy",
            "black",
            "types-pytz",
        ],
    },
    entry_points={
        "console_scripts": [
            "nupkg-metadata=nupkg_metadata.cli.main_cli:app",
        ],
    },
    description="Extracts registry ready metadata from NuGet package archives",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
