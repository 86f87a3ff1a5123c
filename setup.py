#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import re

from setuptools import setup


def get_version(package):
    """
    Return package version as listed in `__version__` in `init.py`.
    """
    init_py = open(os.path.join(package, "__init__.py")).read()
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", init_py).group(1)


def get_long_description():
    """
    Return the README.
    """
    return open("README.md", "r", encoding="utf8").read()


def get_packages(package):
    """
    Return root package and all sub-packages.
    """
    return [
        dirpath
        for dirpath, dirnames, filenames in os.walk(package)
        if os.path.exists(os.path.join(dirpath, "__init__.py"))
    ]


setup(
    name="fastapi-tips",
    version=get_version("fastapi_tips"),
    license="BSD",
    description="Tips for FastAPI and Starlette, with a linter that keeps them correct",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_data={"fastapi_tips": ["py.typed"]},
    packages=get_packages("fastapi_tips"),
    python_requires=">=3.9",
    install_requires=[
        "anyio>=4.0",
        "starlette>=0.37",
        "fastapi>=0.110",
        "httpx>=0.27",
    ],
    extras_require={
        "examples": ["uvicorn[standard]"],
        "tests": ["pytest", "asgi-lifespan>=2.1"],
    },
    entry_points={
        "console_scripts": ["fastapi-tips=fastapi_tips.cli:main"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Documentation",
        "Programming Language :: Python :: 3",
    ],
)
