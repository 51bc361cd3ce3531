# SPDX-License-Identifier: MIT
# Copyright (c) 2025 eve-oauth contributors

"""Setup configuration for eve-oauth package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="eve-oauth",
    version="0.1.0",
    author="eve-oauth Contributors",
    description="EVE Online SSO (OAuth 2.0) authentication strategy with normalized character profiles",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["eve_oauth", "eve_oauth.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.109.0",  # For the login/callback router
        "httpx>=0.27.0",  # For SSO token and verify requests
        "pydantic>=2.4.0",  # For strategy options validation
        "starlette>=0.49.1",  # For request/response types used by the router
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
        ],
    },
)
