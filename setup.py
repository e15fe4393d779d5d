from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="stagegraph",
    version="0.1.0",
    description="Cheapest paths through layered directed acyclic graphs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires=">=3.10",
    install_requires=["networkx", "pydot"],
    extras_require={"dev": ["pytest", "networkx", "pydot"]},
    tests_require=["pytest", "networkx", "pydot"],
    entry_points={"console_scripts": ["stagegraph=stagegraph.cli:main"]},
)
