#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="atlas-tms",
    version="1.0.0",
    author="atlas-tms Team",
    description="Generate Tableau mapsource (TMS) files from Mapbox Atlas style URLs",
    long_description="""
atlas-tms turns one or more Mapbox Atlas style URLs into a Tableau mapsource
(TMS) file.
Features include:
- Decomposition of Atlas style URLs into server, port, username, style id and token
- Rewriting of the mapsource template's connection, layers, styles and defaults
- Optional reachability check of every style URL before generation
- Batch input from a JSON file validated against a JSON Schema
    """.strip(),
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "atlas_tms": ["templates/*.tms", "schema/*.json"],
    },
    entry_points={
        "console_scripts": ["atlas-tms=atlas_tms.cli:main"],
    },
    extras_require={"test": "pytest"},
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=[
        "lxml>=4.6",
        "jsonschema>=3.2",
        "requests>=2.25",
        "urllib3>=1.26",
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: GIS",
    ],
)
