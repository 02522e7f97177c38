"""
Setup script for knotapel.
"""

from setuptools import setup, find_packages

setup(
    name="knotapel",
    version="1.0.0",
    description="Laurent polynomial arithmetic and braid closure geometry for knot theory demos",
    author="Knotapel Project",
    packages=find_packages(include=["knotapel", "knotapel.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
