"""
Setup script for Netpulse - Connectivity Monitoring Engine
"""

import os

from setuptools import setup, find_packages

HERE = os.path.dirname(os.path.abspath(__file__))


# Read requirements from requirements.txt
def read_requirements():
    try:
        with open(os.path.join(HERE, 'requirements.txt'), 'r') as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    except FileNotFoundError:
        return []

setup(
    name="netpulse",
    version="0.1.0",
    description="Netpulse - Connectivity and latency monitoring engine",
    long_description="Periodic TCP-connect and ICMP ping probing of a mutable target list with streamed results.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'netpulse=netpulse.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
)
