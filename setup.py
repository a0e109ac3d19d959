#!/usr/bin/env python3
"""
Setup script for greetwire, a raw-socket HTTP greeting client and server
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="greetwire",
    version="1.0.0",
    author="Chris Bunting",
    description="A minimal HTTP/1.1-style greeting client and server over raw asyncio streams",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["greetwire", "greetwire.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Framework :: AsyncIO",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.1.0",
            "aiohttp>=3.9.0",
            "black>=23.3.0",
            "flake8>=6.0.0",
            "mypy>=1.3.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.1.0",
            "aiohttp>=3.9.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "greetwire-server=greetwire.core.server_core:main",
            "greetwire-client=greetwire.core.client:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
