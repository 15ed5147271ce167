#!/usr/bin/env python3
"""
cpm - 프로바이더 기반 패키지 매니저 CLI
Setup script for package installation
"""

from setuptools import setup, find_packages

# Read README file for long description
def read_file(filename):
    """Read file contents."""
    try:
        with open(filename, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return ""

# Read requirements from requirements.txt
def read_requirements():
    """Read requirements from requirements.txt."""
    requirements = []
    try:
        with open('requirements.txt', 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                # Skip comments and empty lines
                if line and not line.startswith('#'):
                    requirements.append(line)
    except FileNotFoundError:
        pass
    return requirements

setup(
    name="cpm",
    version="0.3.0",
    author="cpm Team",
    description="프로바이더 플러그인(GitHub, npm 등)에 패키지 작업을 위임하는 패키지 매니저 CLI",
    long_description=read_file("README.md") or "cpm - provider based package manager front-end",
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "cpm=cpm.presentation.cli.main:main",
        ],
    },
    install_requires=read_requirements() or [
        "click>=8.1.0",
        "rich>=13.0.0",
        "structlog>=23.1.0",
        "python-dotenv>=1.0.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
        "Environment :: Console",
        "Operating System :: OS Independent",
    ],
    keywords="package-manager, cli, npm, github, registry, plugins",
)
