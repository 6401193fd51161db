from setuptools import setup, find_packages

setup(
    name="ontoParser",
    version="0.1.0",
    description="RDF ontology parsing with strict N-Triples validation and entity extraction",
    author="Your Name",
    author_email="you@example.com",
    packages=find_packages(include=["ontoParser", "ontoParser.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "rdflib>=7.0",
        "tabulate>=0.8.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["ontoParser=ontoParser.cli.__main__:main"],
    },
    license="MIT",
)
